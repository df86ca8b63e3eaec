# app/core/config.py

import logging
import os
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _bool_env(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {"1", "true", "yes"}


# =====================================================
# APPLICATION
# =====================================================
APP_ENV = os.getenv("APP_ENV", "development")
if APP_ENV not in {"development", "staging", "production"}:
    raise ValueError("APP_ENV must be development | staging | production")

IS_PRODUCTION = APP_ENV == "production"

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if APP_ENV == "development" else "INFO").upper()
if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
    raise ValueError("LOG_LEVEL must be DEBUG | INFO | WARNING | ERROR | CRITICAL")

CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()
]

# requests slower than this are logged at WARNING
SLOW_REQUEST_MS = _int_env("SLOW_REQUEST_MS", 2000)

# =====================================================
# DOCUMENT STORE
# =====================================================
DB_TYPE = os.getenv("DB_TYPE", "sqlite")
if DB_TYPE not in {"postgres", "sqlite"}:
    raise ValueError("DB_TYPE must be postgres | sqlite")

if DB_TYPE == "postgres":
    DATABASE_URL = os.getenv("DATABASE_URL")
    if not DATABASE_URL:
        raise ValueError("DATABASE_URL is required for Postgres")
else:
    if IS_PRODUCTION:
        raise ValueError("SQLite is NOT allowed in production")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./warehouse.db")

DB_POOL_SIZE = _int_env("DB_POOL_SIZE", 10)
DB_MAX_OVERFLOW = _int_env("DB_MAX_OVERFLOW", 20)
DB_POOL_TIMEOUT = _int_env("DB_POOL_TIMEOUT", 30)
DB_ECHO_POOL = _bool_env("DB_ECHO_POOL", False)

DB_SSL_VERIFY = _bool_env("DB_SSL_VERIFY", True)
if IS_PRODUCTION and not DB_SSL_VERIFY:
    logger.warning("Running in production with relaxed SSL verification")

# =====================================================
# INVENTORY RULES
# =====================================================
# dashboard-only thresholds, never persisted on items
OVERSTOCK_THRESHOLD = _int_env("OVERSTOCK_THRESHOLD", 200)
CRITICAL_STOCK_THRESHOLD = _int_env("CRITICAL_STOCK_THRESHOLD", 10)
if OVERSTOCK_THRESHOLD < 0 or CRITICAL_STOCK_THRESHOLD < 0:
    raise ValueError("Stock thresholds must be non-negative")

# =====================================================
# IMPORT
# =====================================================
MAX_IMPORT_FILE_MB = _int_env("MAX_IMPORT_FILE_MB", 5)
MAX_IMPORT_FILE_BYTES = MAX_IMPORT_FILE_MB * 1024 * 1024
