# app/core/db.py
#
# One async engine per process. All collections share the single
# "documents" table, created by init_models() in development only.

import logging
import ssl
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import (
    APP_ENV,
    DATABASE_URL,
    DB_ECHO_POOL,
    DB_MAX_OVERFLOW,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_TYPE,
)

logger = logging.getLogger(__name__)

Base = declarative_base()


# =====================================================
# ENGINE
# =====================================================
def _engine_options() -> dict:
    if DB_TYPE == "sqlite":
        return {"connect_args": {"check_same_thread": False}}

    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    return {
        "connect_args": {
            "ssl": ssl_ctx,
            # pgbouncer (transaction pooling) cannot keep prepared statements
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
        },
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    **_engine_options(),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


# registers Document on Base.metadata
import app.models  # noqa: E402,F401


async def init_models() -> None:
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Document table ready", extra={"db_type": DB_TYPE})


async def dispose_engine() -> None:
    await engine.dispose()
