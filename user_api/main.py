# user_api/main.py
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from user_api import database
from user_api.config import APP_NAME, APP_VERSION, CORS_ORIGINS, SEED_SAMPLE_DATA
from user_api.errors import register_exception_handlers
from user_api.logging_config import get_logger, setup_logging
from user_api.routers import dashboard, health, users
from user_api.services.user_service import seed_sample_users

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # create the table (idempotent) and seed it once when empty
    database.init_db(database.engine)
    if SEED_SAMPLE_DATA:
        db = database.SessionLocal()
        try:
            seed_sample_users(db)
        finally:
            db.close()
    logger.info("%s %s started", APP_NAME, APP_VERSION)
    yield
    database.engine.dispose()


app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s - Origin: %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        request.headers.get("origin", "none"),
        response.status_code,
        elapsed_ms,
    )
    return response


# include routers
app.include_router(health.router)
app.include_router(users.router)
app.include_router(dashboard.router)
