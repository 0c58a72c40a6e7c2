# user_api/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from user_api.config import DB_POOL_SIZE, build_database_url
from user_api.logging_config import get_logger

logger = get_logger("database")

DATABASE_URL = build_database_url()


def make_engine(url: str = DATABASE_URL) -> Engine:
    """
    One engine per process. Server databases get a fixed-size pool that every
    request borrows from. An in-memory SQLite database lives on a single
    connection, so every thread has to share it.
    """
    if url.startswith("sqlite"):
        if url in ("sqlite://", "sqlite:///") or ":memory:" in url:
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=DB_POOL_SIZE,
        max_overflow=0,
        pool_pre_ping=True,
    )


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency to get a DB session for a request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    # import models so SQLAlchemy registers them
    import user_api.models.user  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("users table ready")
