import datetime

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from user_api.database import init_db
from user_api.models.user import User
from user_api.schemas.user import UserCreate, UserUpdate
from user_api.services import user_service


def test_init_db_is_idempotent():
    engine = create_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    init_db(engine)
    columns = {c["name"] for c in inspect(engine).get_columns("users")}
    assert columns == {"id", "username", "email", "first_name", "last_name", "age", "city", "created_at"}


def test_seed_only_fills_an_empty_table(db_session):
    assert user_service.seed_sample_users(db_session) == len(user_service.SAMPLE_USERS)
    assert user_service.seed_sample_users(db_session) == 0
    assert db_session.query(User).count() == len(user_service.SAMPLE_USERS)


def test_seed_skips_when_users_exist(db_session):
    user_service.create_user(db_session, UserCreate(username="alice", email="alice@x.com"))
    assert user_service.seed_sample_users(db_session) == 0
    assert db_session.query(User).count() == 1


def test_duplicate_create_raises_and_leaves_session_usable(db_session):
    user_service.create_user(db_session, UserCreate(username="alice", email="alice@x.com"))
    with pytest.raises(user_service.DuplicateUserError):
        user_service.create_user(db_session, UserCreate(username="alice", email="new@x.com"))
    assert len(user_service.list_users(db_session)) == 1


def test_update_and_delete_unknown_id(db_session):
    assert user_service.update_user(db_session, 42, UserUpdate(city="Oslo")) is None
    assert user_service.delete_user(db_session, 42) is False


def test_update_can_clear_a_field(db_session):
    user = user_service.create_user(db_session, UserCreate(username="a", email="a@x.com", city="Oslo"))
    updated = user_service.update_user(db_session, user.id, UserUpdate(city=None))
    assert updated.city is None


def test_new_today_counts_only_todays_rows(db_session):
    now = datetime.datetime(2026, 10, 19, 12, 0, 0)
    db_session.add_all([
        User(username="old", email="old@x.com", created_at=now - datetime.timedelta(days=1)),
        User(username="new1", email="new1@x.com", created_at=now.replace(hour=0, minute=5)),
        User(username="new2", email="new2@x.com", created_at=now.replace(hour=23, minute=59)),
    ])
    db_session.commit()
    stats = user_service.dashboard_stats(db_session, now=now)
    assert stats["totalUsers"] == 3
    assert stats["newToday"] == 2
    assert datetime.datetime.fromisoformat(stats["timestamp"]).utcoffset() == datetime.timedelta(0)
