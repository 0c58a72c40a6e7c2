# user_api/models/user.py
import datetime
from sqlalchemy import Column, Integer, String, TIMESTAMP
from user_api.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    age = Column(Integer, nullable=True)
    city = Column(String(100), nullable=True)
    # local time, so "created today" lines up with the server's calendar day
    created_at = Column(TIMESTAMP, default=datetime.datetime.now, nullable=False, index=True)

    def __repr__(self):
        return f"<User id={self.id} username={self.username!r}>"
