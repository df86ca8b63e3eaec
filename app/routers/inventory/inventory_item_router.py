# app/routers/inventory/inventory_item_router.py

import logging
from fastapi import APIRouter, Depends, Query

from app.schemas.inventory.inventory_item_schemas import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryListData,
    InventoryStats,
    BulkIdsPayload,
    BulkUpdatePayload,
    BulkOperationResult,
)
from app.services.inventory.inventory_item_service import (
    list_inventory_items,
    get_inventory_item,
    create_inventory_item,
    update_inventory_item,
    archive_inventory_item,
    restore_inventory_item,
    delete_inventory_item,
    permanently_delete_inventory_item,
)
from app.services.inventory.bulk_service import (
    bulk_archive_inventory_items,
    bulk_restore_inventory_items,
    bulk_delete_inventory_items,
    bulk_permanently_delete_inventory_items,
    bulk_update_inventory_items,
)
from app.services.inventory.category_service import get_categories
from app.services.inventory.stats_service import compute_inventory_stats
from app.services.storage.document_store import DocumentStore
from app.utils.get_store import get_store
from app.utils.response import APIResponse, success_response, bulk_message

router = APIRouter(prefix="/inventory", tags=["Inventory"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=APIResponse[InventoryListData])
async def list_inventory_api(
    store: DocumentStore = Depends(get_store),
    search: str | None = Query(None, description="Search by name, id or brand"),
    category: str | None = Query(None),
    status: str | None = Query(None),
    include_archived: bool = Query(False),
    archived_only: bool = Query(False),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1, le=500),
    sort_by: str = Query("id"),
    sort_order: str = Query("asc"),
):
    logger.info("List inventory", extra={"search": search, "category": category})
    data = await list_inventory_items(
        store,
        search=search,
        category=category,
        status=status,
        include_archived=include_archived,
        archived_only=archived_only,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    return success_response("Inventory fetched successfully", data)


@router.get("/stats", response_model=APIResponse[InventoryStats])
async def inventory_stats_api(store: DocumentStore = Depends(get_store)):
    items = (await list_inventory_items(store)).items
    categories = await get_categories(store)
    stats = compute_inventory_stats(items, [c.name for c in categories])
    return success_response("Inventory statistics fetched successfully", stats)


@router.get("/{item_id}", response_model=APIResponse[InventoryItem])
async def get_inventory_item_api(
    item_id: str,
    store: DocumentStore = Depends(get_store),
):
    item = await get_inventory_item(store, item_id)
    return success_response("Item fetched successfully", item)


@router.post("/", response_model=APIResponse[InventoryItem])
async def create_inventory_item_api(
    payload: InventoryItemCreate,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Create inventory item", extra={"item_name": payload.name})
    item = await create_inventory_item(store, payload)
    return success_response("Item created successfully", item)


@router.patch("/{item_id}", response_model=APIResponse[InventoryItem])
async def update_inventory_item_api(
    item_id: str,
    payload: InventoryItemUpdate,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Update inventory item", extra={"item_id": item_id})
    item = await update_inventory_item(store, item_id, payload)
    return success_response("Item updated successfully", item)


@router.patch("/{item_id}/archive", response_model=APIResponse[InventoryItem])
async def archive_inventory_item_api(
    item_id: str,
    store: DocumentStore = Depends(get_store),
):
    item = await archive_inventory_item(store, item_id)
    return success_response("Item archived successfully", item)


@router.patch("/{item_id}/restore", response_model=APIResponse[InventoryItem])
async def restore_inventory_item_api(
    item_id: str,
    store: DocumentStore = Depends(get_store),
):
    item = await restore_inventory_item(store, item_id)
    return success_response("Item restored successfully", item)


@router.delete("/{item_id}", response_model=APIResponse[None])
async def delete_inventory_item_api(
    item_id: str,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Delete inventory item", extra={"item_id": item_id})
    await delete_inventory_item(store, item_id)
    return success_response("Item deleted successfully")


@router.delete("/{item_id}/permanent", response_model=APIResponse[None])
async def permanently_delete_inventory_item_api(
    item_id: str,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Permanently delete inventory item", extra={"item_id": item_id})
    await permanently_delete_inventory_item(store, item_id)
    return success_response("Item permanently deleted")


# =========================
# BULK
# =========================
@router.post("/bulk/archive", response_model=APIResponse[BulkOperationResult])
async def bulk_archive_api(
    payload: BulkIdsPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_archive_inventory_items(store, payload.ids)
    return success_response(
        bulk_message("Archived", result.success_count, result.failed_count), result
    )


@router.post("/bulk/restore", response_model=APIResponse[BulkOperationResult])
async def bulk_restore_api(
    payload: BulkIdsPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_restore_inventory_items(store, payload.ids)
    return success_response(
        bulk_message("Restored", result.success_count, result.failed_count), result
    )


@router.post("/bulk/delete", response_model=APIResponse[BulkOperationResult])
async def bulk_delete_api(
    payload: BulkIdsPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_delete_inventory_items(store, payload.ids)
    return success_response(
        bulk_message("Deleted", result.success_count, result.failed_count), result
    )


@router.post("/bulk/permanent-delete", response_model=APIResponse[BulkOperationResult])
async def bulk_permanent_delete_api(
    payload: BulkIdsPayload,
    store: DocumentStore = Depends(get_store),
):
    result = await bulk_permanently_delete_inventory_items(store, payload.ids)
    return success_response(
        bulk_message("Permanently deleted", result.success_count, result.failed_count),
        result,
    )


@router.post("/bulk/update", response_model=APIResponse[BulkOperationResult])
async def bulk_update_api(
    payload: BulkUpdatePayload,
    store: DocumentStore = Depends(get_store),
):
    logger.info(
        "Bulk update inventory",
        extra={"count": len(payload.ids), "fields": sorted(payload.updates.model_fields_set)},
    )
    result = await bulk_update_inventory_items(store, payload.ids, payload.updates)
    return success_response(
        bulk_message("Updated", result.success_count, result.failed_count), result
    )
