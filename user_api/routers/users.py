# user_api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from user_api.database import get_db
from user_api.schemas.user import (
    MessageResponse,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from user_api.services import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
def list_users(db: Session = Depends(get_db)):
    """All users, most recently created first."""
    users = user_service.list_users(db)
    return {"success": True, "data": users, "count": len(users)}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "data": user}


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """
    Create a user. username and email are required and must be unique;
    400 otherwise. Nothing touches the database when a required field is missing.
    """
    if not payload.username or not payload.email:
        raise HTTPException(status_code=400, detail="Username and email are required")
    try:
        user = user_service.create_user(db, payload)
    except user_service.DuplicateUserError:
        raise HTTPException(status_code=400, detail="Username or email already exists")
    return {"success": True, "data": user}


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    user = user_service.update_user(db, user_id, payload)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "data": user}


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    if not user_service.delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True, "message": "User deleted successfully"}
