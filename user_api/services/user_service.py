# user_api/services/user_service.py
import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_api.logging_config import get_logger
from user_api.models.user import User
from user_api.schemas.user import UserCreate, UserUpdate
from user_api.services.stats_service import rank_cities, round_half_up

logger = get_logger("user_service")

PROFILE_FIELDS = ("first_name", "last_name", "age", "city")

SAMPLE_USERS = [
    {"username": "john_doe", "email": "john@example.com", "first_name": "John",
     "last_name": "Doe", "age": 30, "city": "New York"},
    {"username": "jane_smith", "email": "jane@example.com", "first_name": "Jane",
     "last_name": "Smith", "age": 25, "city": "London"},
    {"username": "bob_wilson", "email": "bob@example.com", "first_name": "Bob",
     "last_name": "Wilson", "age": 35, "city": "New York"},
]


def utc_timestamp() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


class DuplicateUserError(Exception):
    """username or email already taken"""


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, payload: UserCreate) -> User:
    """
    Insert a user and return the stored row (refreshed, so database-generated
    values such as id are populated). Raises DuplicateUserError when the
    username or email is already in use; nothing is written in that case.
    """
    user = User(**payload.model_dump(include={"username", "email", *PROFILE_FIELDS}))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Duplicate user rejected: %s / %s", payload.username, payload.email)
        raise DuplicateUserError(str(e.orig)) from e
    db.refresh(user)
    logger.info("Created user id=%s username=%s", user.id, user.username)
    return user


def update_user(db: Session, user_id: int, payload: UserUpdate) -> Optional[User]:
    """Apply only the profile fields present in the request body."""
    user = get_user(db, user_id)
    if not user:
        return None
    for key, value in payload.model_dump(exclude_unset=True, include=set(PROFILE_FIELDS)).items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> bool:
    deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def dashboard_stats(db: Session, now: Optional[datetime.datetime] = None) -> Dict[str, Any]:
    now = now or datetime.datetime.now()
    total = db.query(func.count(User.id)).scalar() or 0

    avg = db.query(func.avg(User.age)).filter(User.age.isnot(None)).scalar()
    average_age = round_half_up(float(avg)) if avg is not None else None

    rows = (
        db.query(User.city, func.count(User.id))
        .filter(User.city.isnot(None), User.city != "")
        .group_by(User.city)
        .all()
    )
    top = rank_cities({city: count for city, count in rows})

    start_of_day = datetime.datetime.combine(now.date(), datetime.time.min)
    new_today = (
        db.query(func.count(User.id))
        .filter(User.created_at >= start_of_day,
                User.created_at < start_of_day + datetime.timedelta(days=1))
        .scalar()
        or 0
    )

    return {
        "totalUsers": int(total),
        "averageAge": average_age,
        "topCities": top,
        "newToday": int(new_today),
        "timestamp": utc_timestamp(),
    }


def seed_sample_users(db: Session) -> int:
    """Insert the sample users, but only into an empty table."""
    if db.query(User.id).first() is not None:
        return 0
    for data in SAMPLE_USERS:
        db.add(User(**data))
    db.commit()
    logger.info("Seeded %d sample users", len(SAMPLE_USERS))
    return len(SAMPLE_USERS)
