import logging
from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.schemas.inventory.inventory_item_schemas import BulkIdsPayload, BulkOperationResult
from app.schemas.masters.supplier_schemas import (
    SupplierCreate,
    SupplierUpdate,
    SupplierOut,
    SupplierListData,
    SupplierBulkStatusPayload,
)
from app.services.masters.supplier_service import (
    create_supplier,
    get_supplier,
    list_suppliers,
    update_supplier,
    archive_supplier,
    restore_supplier,
    delete_supplier,
)
from app.services.inventory.bulk_service import (
    bulk_archive_suppliers,
    bulk_restore_suppliers,
    bulk_delete_suppliers,
    bulk_update_supplier_status,
)
from app.services.storage.document_store import DocumentStore
from app.utils.get_store import get_store
from app.utils.response import APIResponse, success_response, bulk_message

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=APIResponse[SupplierOut])
async def create_supplier_api(
    payload: SupplierCreate,
    store: DocumentStore = Depends(get_store),
):
    logger.info(
        "Create supplier",
        extra={"supplier_name": payload.name, "email": payload.email},
    )

    supplier = await create_supplier(store, payload)
    return success_response("Supplier created successfully", supplier)


@router.get("/{supplier_id}", response_model=APIResponse[SupplierOut])
async def get_supplier_api(
    supplier_id: str,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Get supplier", extra={"supplier_id": supplier_id})

    supplier = await get_supplier(store, supplier_id)
    return success_response("Supplier fetched successfully", supplier)


@router.get("/", response_model=APIResponse[SupplierListData])
async def list_suppliers_api(
    store: DocumentStore = Depends(get_store),

    search: Optional[str] = Query(None),
    include_archived: bool = Query(True),

    sort_by: str = Query("id"),
    sort_order: str = Query("asc"),
):
    logger.info(
        "List suppliers",
        extra={
            "search": search,
            "sort_by": sort_by,
            "sort_order": sort_order,
        },
    )

    data = await list_suppliers(
        store,
        search=search,
        include_archived=include_archived,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    return success_response("Suppliers fetched successfully", data)


@router.patch("/{supplier_id}", response_model=APIResponse[SupplierOut])
async def update_supplier_api(
    supplier_id: str,
    payload: SupplierUpdate,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Update supplier", extra={"supplier_id": supplier_id})

    supplier = await update_supplier(store, supplier_id, payload)
    return success_response("Supplier updated successfully", supplier)


@router.patch("/{supplier_id}/archive", response_model=APIResponse[SupplierOut])
async def archive_supplier_api(
    supplier_id: str,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Archive supplier", extra={"supplier_id": supplier_id})

    supplier = await archive_supplier(store, supplier_id)
    return success_response("Supplier archived successfully", supplier)


@router.patch("/{supplier_id}/restore", response_model=APIResponse[SupplierOut])
async def restore_supplier_api(
    supplier_id: str,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Restore supplier", extra={"supplier_id": supplier_id})

    supplier = await restore_supplier(store, supplier_id)
    return success_response("Supplier restored successfully", supplier)


@router.delete("/{supplier_id}", response_model=APIResponse[None])
async def delete_supplier_api(
    supplier_id: str,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Delete supplier", extra={"supplier_id": supplier_id})

    await delete_supplier(store, supplier_id)
    return success_response("Supplier deleted successfully")


# =========================
# BULK
# =========================
@router.post("/bulk/archive", response_model=APIResponse[BulkOperationResult])
async def bulk_archive_suppliers_api(
    payload: BulkIdsPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_archive_suppliers(store, payload.ids)
    return success_response(
        bulk_message("Archived", result.success_count, result.failed_count, "supplier"),
        result,
    )


@router.post("/bulk/restore", response_model=APIResponse[BulkOperationResult])
async def bulk_restore_suppliers_api(
    payload: BulkIdsPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_restore_suppliers(store, payload.ids)
    return success_response(
        bulk_message("Restored", result.success_count, result.failed_count, "supplier"),
        result,
    )


@router.post("/bulk/delete", response_model=APIResponse[BulkOperationResult])
async def bulk_delete_suppliers_api(
    payload: BulkIdsPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_delete_suppliers(store, payload.ids)
    return success_response(
        bulk_message("Deleted", result.success_count, result.failed_count, "supplier"),
        result,
    )


@router.post("/bulk/status", response_model=APIResponse[BulkOperationResult])
async def bulk_supplier_status_api(
    payload: SupplierBulkStatusPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_update_supplier_status(store, payload.ids, payload.status)
    return success_response(
        bulk_message("Updated", result.success_count, result.failed_count, "supplier"),
        result,
    )
