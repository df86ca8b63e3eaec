# app/routers/inventory/import_router.py

import logging
from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.config import MAX_IMPORT_FILE_BYTES, MAX_IMPORT_FILE_MB
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.schemas.inventory.import_schemas import (
    ImportConfirmPayload,
    ImportPreview,
    ImportResult,
)
from app.services.inventory.import_service import import_confirm, parse_import_rows
from app.services.storage.document_store import DocumentStore
from app.utils.get_store import get_store
from app.utils.response import APIResponse, success_response
from app.utils.tabular_parser import read_tabular_file

router = APIRouter(prefix="/inventory/import", tags=["Inventory Import"])
logger = logging.getLogger(__name__)


@router.post("/preview", response_model=APIResponse[ImportPreview])
async def import_preview_api(file: UploadFile = File(...)):
    content = await file.read()
    if len(content) > MAX_IMPORT_FILE_BYTES:
        raise AppException(
            413,
            f"File exceeds the {MAX_IMPORT_FILE_MB} MB limit",
            ErrorCode.IMPORT_FILE_INVALID,
        )

    logger.info(
        "Import preview",
        extra={"upload_name": file.filename, "size_bytes": len(content)},
    )

    # pandas parsing is blocking
    rows = await run_in_threadpool(read_tabular_file, file.filename, content)
    preview = parse_import_rows(rows)
    return success_response(
        f"{len(preview.items)} items ready to import", preview
    )


@router.post("/confirm", response_model=APIResponse[ImportResult])
async def import_confirm_api(
    payload: ImportConfirmPayload,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Import confirm", extra={"count": len(payload.items)})

    result = await import_confirm(store, payload.items)

    message = f"Successfully imported {result.created_count} items"
    if result.suppliers_created:
        plural = "s" if result.suppliers_created > 1 else ""
        message += f" and created {result.suppliers_created} new supplier{plural}"
    return success_response(message, result)
