# user_api/routers/health.py
import socket

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from user_api.config import APP_NAME, APP_VERSION, SERVICE_NAME
from user_api.database import get_db
from user_api.logging_config import get_logger
from user_api.services.user_service import utc_timestamp

logger = get_logger("health")

router = APIRouter(tags=["Health"])


@router.get("/")
def root():
    return {
        "message": APP_NAME,
        "version": APP_VERSION,
        "status": "online",
        "endpoints": {
            "health": "/api/health",
            "test": "/api/test",
            "users": "/api/users",
            "dashboard": "/api/dashboard",
            "docs": "/docs",
        },
    }


@router.get("/api/health")
def health(db: Session = Depends(get_db)):
    """Liveness plus a SELECT 1 against the pool; 503 when the database is unreachable."""
    body = {
        "success": True,
        "status": "healthy",
        "database": "connected",
        "timestamp": utc_timestamp(),
        "service": SERVICE_NAME,
        "hostname": socket.gethostname(),
    }
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        body.update(success=False, status="unhealthy", database="disconnected",
                    error=str(getattr(e, "orig", None) or e))
        return JSONResponse(status_code=503, content=body)
    return body


@router.get("/api/test")
def test_endpoint():
    return {
        "success": True,
        "message": "Test endpoint working!",
        "timestamp": utc_timestamp(),
        "simple": True,
    }
