# app/core/logging.py

import sys
from logging.config import dictConfig

from app.core.config import LOG_LEVEL

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# fields supplied through `extra` by request_logging_middleware
ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | "
    "%(method)s %(path)s | %(status_code)s | %(process_time_ms)sms"
)


def build_logging_config(level: str = LOG_LEVEL) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": CONSOLE_FORMAT},
            "access": {"format": ACCESS_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "default",
            },
            "access_console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "access",
            },
        },
        "loggers": {
            "access": {
                "handlers": ["access_console"],
                "level": "INFO",
                "propagate": False,
            },
            # requests are already logged by the access logger
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def setup_logging(level: str = LOG_LEVEL) -> None:
    dictConfig(build_logging_config(level))
