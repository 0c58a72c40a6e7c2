# user_api/config.py
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load environment variables from .env (recommended)
load_dotenv()

APP_NAME = "User Management API"
APP_VERSION = "1.0.0"
SERVICE_NAME = "user-management-api"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SEED_SAMPLE_DATA = _env_flag("SEED_SAMPLE_DATA", True)


def build_database_url() -> str:
    """
    DATABASE_URL wins when set; otherwise a MySQL URL is assembled from the
    DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME variables.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "3306")
    user = os.getenv("DB_USER", "root")
    password = os.getenv("DB_PASSWORD", "")
    name = os.getenv("DB_NAME", "user_management")
    credentials = quote_plus(user)
    if password:
        credentials += ":" + quote_plus(password)
    return f"mysql+pymysql://{credentials}@{host}:{port}/{name}"
