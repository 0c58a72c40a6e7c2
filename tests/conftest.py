"""
Pytest configuration and shared fixtures.
"""

import os

# keep the app's own engine away from MySQL while tests import it
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from user_api.database import Base, get_db
from user_api.main import app
import user_api.models.user  # noqa: F401

# --- Test Database Setup ---
TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def db_session():
    """Fresh tables for each test; yields a session on the test engine."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session):
    app.dependency_overrides[get_db] = override_get_db
    # not used as a context manager, so the startup hook does not run
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def sample_users():
    return [
        {"id": 1, "username": "alice", "email": "alice@x.com", "first_name": "Alice",
         "last_name": "Liddell", "age": 30, "city": "London"},
        {"id": 2, "username": "bob", "email": "bob@x.com", "first_name": "Bob",
         "last_name": None, "age": 25, "city": "Paris"},
        {"id": 3, "username": "carol", "email": "carol@x.com", "first_name": None,
         "last_name": "King", "age": None, "city": "London"},
        {"id": 4, "username": "dave", "email": "dave@y.org", "first_name": "Dave",
         "last_name": "Grohl", "age": 40, "city": None},
    ]
