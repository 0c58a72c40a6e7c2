import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import QueuePool, StaticPool

import user_api.main as main_module
from user_api import database
from user_api.database import Base, make_engine
from user_api.main import app
from user_api.services.user_service import SAMPLE_USERS


@pytest.fixture()
def live_app():
    """The app with its own engine: no dependency overrides."""
    app.dependency_overrides.clear()
    yield app
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=database.engine)


def test_startup_creates_table_on_in_memory_sqlite(live_app, monkeypatch):
    monkeypatch.setattr(main_module, "SEED_SAMPLE_DATA", False)
    with TestClient(live_app) as c:
        response = c.get("/api/users")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": [], "count": 0}

        created = c.post("/api/users", json={"username": "alice", "email": "alice@x.com"})
        assert created.status_code == 201
        assert c.get("/api/users").json()["count"] == 1
        assert c.get("/api/health").json()["database"] == "connected"


def test_startup_seeds_sample_users_when_enabled(live_app, monkeypatch):
    monkeypatch.setattr(main_module, "SEED_SAMPLE_DATA", True)
    with TestClient(live_app) as c:
        body = c.get("/api/users").json()
        assert body["count"] == len(SAMPLE_USERS)
        assert {u["username"] for u in body["data"]} == {u["username"] for u in SAMPLE_USERS}
        assert c.get("/api/dashboard").json()["data"]["totalUsers"] == len(SAMPLE_USERS)


def test_in_memory_sqlite_shares_one_connection():
    assert isinstance(make_engine("sqlite://").pool, StaticPool)
    assert isinstance(make_engine("sqlite:///:memory:").pool, StaticPool)


def test_mysql_engine_has_fixed_pool_of_ten():
    engine = make_engine("mysql+pymysql://u@h:3306/d")
    assert isinstance(engine.pool, QueuePool)
    assert engine.pool.size() == 10
    assert engine.pool._max_overflow == 0
    assert engine.pool._pre_ping is True
