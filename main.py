# main.py
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers import (
    inventory_router,
    import_router,
    category_router,
    supplier_router,
)

from app.core.config import APP_ENV, CORS_ORIGINS, DB_TYPE
from app.core.db import dispose_engine, init_models
from app.core.error_handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.middleware.request_logging import request_logging_middleware

APP_NAME = "Warehouse Inventory API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

setup_logging()
logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# LIFESPAN
# ------------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Warehouse API starting", extra={"env": APP_ENV, "db_type": DB_TYPE})

    # schema is migrated out of band everywhere except development
    if APP_ENV == "development":
        await init_models()

    yield

    await dispose_engine()
    logger.info("Warehouse API stopped")


app = FastAPI(
    title=APP_NAME,
    description="Inventory items, suppliers, categories and spreadsheet import",
    version=APP_VERSION,
    docs_url=None if APP_ENV == "production" else "/docs",
    redoc_url=None,
    lifespan=lifespan,
)

register_exception_handlers(app)

# ------------------------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------------------------
app.middleware("http")(request_logging_middleware)

if CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )


@app.get("/", tags=["Health"])
async def health_check():
    return {
        "status": "ok",
        "service": "warehouse-inventory-api",
        "environment": APP_ENV,
        "storage": DB_TYPE,
        "version": APP_VERSION,
    }


# ------------------------------------------------------------------------------
# ROUTERS
# ------------------------------------------------------------------------------
for router in (inventory_router, import_router, category_router, supplier_router):
    app.include_router(router)
