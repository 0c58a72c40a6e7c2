"""
Logging setup for the API process.

Console-only, level taken from LOG_LEVEL. uvicorn's own loggers are routed
through the same handler so request lines and application lines share a
format.
"""

import logging
import logging.config
import sys
from typing import Any, Dict

from user_api.config import LOG_LEVEL

LOGGER_NAME = "user_api"


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Configure application-wide logging and return the package logger."""
    logging_config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "simple",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "": {"level": level, "handlers": ["console"]},
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(logging_config)

    logger = logging.getLogger(LOGGER_NAME)
    logger.info("Logging configured with level: %s", level)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
