# user_api/schemas/user.py
from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime


class UserProfile(BaseModel):
    """Optional profile fields; blank strings from forms are stored as NULL."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[int] = None
    city: Optional[str] = None

    @field_validator("first_name", "last_name", "age", "city", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return None
        return value


class UserCreate(UserProfile):
    # presence is checked by the route so a missing field maps to 400
    username: Optional[str] = None
    email: Optional[str] = None

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_identity(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class UserUpdate(UserProfile):
    pass


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[int] = None
    city: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    success: bool = True
    data: UserOut


class UserListResponse(BaseModel):
    success: bool = True
    data: List[UserOut]
    count: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
