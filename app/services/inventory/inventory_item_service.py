# app/services/inventory/inventory_item_service.py

import logging
from datetime import datetime, timezone
from typing import Optional

from app.constants.error_codes import ErrorCode
from app.models.enums.stock_status import StockStatus
from app.core.exceptions import (
    DuplicateIdException,
    NotFoundException,
    ValidationException,
)
from app.schemas.inventory.inventory_item_schemas import (
    InventoryItem,
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryListData,
)
from app.services.inventory.code_generator import next_inventory_id, next_location_code
from app.services.inventory.stock_status import compute_status
from app.services.storage.document_store import INVENTORY, DocumentStore, strip_empty
from app.utils.number_utils import (
    optional_non_negative_int,
    to_non_negative_float,
    to_non_negative_int,
)

logger = logging.getLogger(__name__)

ALLOWED_SORT_FIELDS = {
    "id",
    "name",
    "category",
    "quantity",
    "price_per_piece",
    "location",
    "status",
}

TEXT_FIELDS = ("name", "category", "subcategory", "location", "brand", "supplier_id", "photo_url", "description")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _resolve_reorder_required(quantity: int, reorder_level: Optional[int], requested: bool) -> bool:
    if reorder_level is not None and quantity <= reorder_level:
        return True
    return bool(requested)


# =========================
# MAPPER
# =========================
STOCK_STATUS_VALUES = {s.value for s in StockStatus}


def _stored_status(doc: dict, quantity: int, reorder_required: bool) -> str:
    # legacy documents may carry "Overstock" or "Unknown"; re-derive those
    status = doc.get("status")
    if status in STOCK_STATUS_VALUES:
        return status
    return compute_status(quantity, reorder_required, doc.get("reorder_level")).value


def _map_item(doc: dict) -> InventoryItem:
    quantity = doc.get("quantity") or 0
    reorder_required = doc.get("reorder_required") or False

    return InventoryItem(
        id=doc["id"],
        name=doc.get("name", ""),
        category=doc.get("category", ""),
        subcategory=doc.get("subcategory"),
        quantity=quantity,
        location=doc.get("location", ""),
        brand=doc.get("brand") or "",
        price_per_piece=doc.get("price_per_piece") or 0,
        supplier_id=doc.get("supplier_id") or "",
        quantity_purchased=doc.get("quantity_purchased") or 0,
        quantity_sold=doc.get("quantity_sold") or 0,
        reorder_required=reorder_required,
        reorder_level=doc.get("reorder_level"),
        status=_stored_status(doc, quantity, reorder_required),
        photo_url=doc.get("photo_url"),
        description=doc.get("description"),
        archived=doc.get("archived") or False,
        archived_at=doc.get("archived_at"),
    )


async def _get_existing(store: DocumentStore, item_id: str) -> dict:
    doc = await store.get_one(INVENTORY, item_id)
    if not doc:
        raise NotFoundException("Item not found", ErrorCode.ITEM_NOT_FOUND)
    return doc


# =========================
# LIST / GET
# =========================
async def list_inventory_items(
    store: DocumentStore,
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    include_archived: bool = False,
    archived_only: bool = False,
    sort_by: str = "id",
    sort_order: str = "asc",
    page: int = 1,
    page_size: Optional[int] = None,
) -> InventoryListData:
    if sort_by not in ALLOWED_SORT_FIELDS:
        raise ValidationException("Invalid sort field")

    items = [_map_item(d) for d in await store.get_all(INVENTORY)]

    if archived_only:
        items = [i for i in items if i.archived]
    elif not include_archived:
        items = [i for i in items if not i.archived]

    if search:
        needle = search.strip().lower()
        items = [
            i for i in items
            if needle in i.name.lower()
            or needle in i.id.lower()
            or needle in i.brand.lower()
        ]

    if category:
        items = [i for i in items if i.category == category]

    if status:
        items = [i for i in items if i.status == status]

    items.sort(
        key=lambda i: getattr(i, sort_by),
        reverse=sort_order.lower() == "desc",
    )

    total = len(items)
    if page_size:
        offset = (page - 1) * page_size
        items = items[offset:offset + page_size]

    return InventoryListData(total=total, items=items)


async def get_inventory_item(store: DocumentStore, item_id: str) -> InventoryItem:
    return _map_item(await _get_existing(store, item_id))


# =========================
# CREATE
# =========================
async def create_inventory_item(
    store: DocumentStore,
    payload: InventoryItemCreate,
) -> InventoryItem:
    name = _clean_text(payload.name)
    category = _clean_text(payload.category)
    if not name:
        raise ValidationException("Item name is required")
    if not category:
        raise ValidationException("Category is required")

    requested_id = _clean_text(payload.id)
    location = _clean_text(payload.location)

    existing: list[dict] = []
    if not requested_id or not location:
        existing = await store.get_all(INVENTORY)

    item_id = requested_id or next_inventory_id(d["id"] for d in existing)
    location = location or next_location_code(category, existing)

    quantity = to_non_negative_int(payload.quantity)
    reorder_level = optional_non_negative_int(payload.reorder_level)
    reorder_required = _resolve_reorder_required(
        quantity, reorder_level, payload.reorder_required
    )

    item = {
        "name": name,
        "category": category,
        "subcategory": _clean_text(payload.subcategory),
        "quantity": quantity,
        "location": location,
        "brand": (payload.brand or "").strip(),
        "price_per_piece": to_non_negative_float(payload.price_per_piece),
        "supplier_id": (payload.supplier_id or "").strip(),
        "quantity_purchased": to_non_negative_int(payload.quantity_purchased),
        "quantity_sold": to_non_negative_int(payload.quantity_sold),
        "reorder_required": reorder_required,
        "reorder_level": reorder_level,
        "status": compute_status(quantity, reorder_required, reorder_level).value,
        "photo_url": _clean_text(payload.photo_url),
        "description": _clean_text(payload.description),
        "archived": False,
    }

    # Point read right before the write; concurrent creators can still race
    if await store.get_one(INVENTORY, item_id):
        raise DuplicateIdException(f"Item with id {item_id} already exists", item_id)

    item = strip_empty(item)
    await store.set_one(INVENTORY, item_id, item)

    logger.info(
        "Inventory item created",
        extra={"item_id": item_id, "location": location, "status": item["status"]},
    )
    return _map_item({**item, "id": item_id})


# =========================
# UPDATE
# =========================
async def update_inventory_item(
    store: DocumentStore,
    item_id: str,
    payload: InventoryItemUpdate,
) -> InventoryItem:
    prev = await _get_existing(store, item_id)

    updates = strip_empty(payload.model_dump(exclude_unset=True))
    for field in TEXT_FIELDS:
        if field in updates:
            updates[field] = updates[field].strip()

    if "name" in updates and not updates["name"]:
        raise ValidationException("Item name is required")
    if "category" in updates and not updates["category"]:
        raise ValidationException("Category is required")

    def pick(field, default=0):
        return updates[field] if field in updates else prev.get(field, default)

    quantity = to_non_negative_int(pick("quantity"))
    reorder_level = optional_non_negative_int(pick("reorder_level", None))
    reorder_required = _resolve_reorder_required(
        quantity, reorder_level, pick("reorder_required", False)
    )

    merged = {
        **prev,
        **updates,
        "quantity": quantity,
        "quantity_purchased": to_non_negative_int(pick("quantity_purchased")),
        "quantity_sold": to_non_negative_int(pick("quantity_sold")),
        "reorder_required": reorder_required,
        "reorder_level": reorder_level,
        "status": compute_status(quantity, reorder_required, reorder_level).value,
    }
    merged.pop("id", None)
    merged = strip_empty(merged)

    await store.update_one(INVENTORY, item_id, merged)

    logger.info(
        "Inventory item updated",
        extra={"item_id": item_id, "fields": sorted(updates)},
    )
    return _map_item({**merged, "id": item_id})


# =========================
# ARCHIVE / RESTORE
# =========================
async def archive_inventory_item(store: DocumentStore, item_id: str) -> InventoryItem:
    prev = await _get_existing(store, item_id)

    changes = {"archived": True, "archived_at": utc_now_iso()}
    await store.update_one(INVENTORY, item_id, changes)

    logger.info("Inventory item archived", extra={"item_id": item_id})
    return _map_item({**prev, **changes, "id": item_id})


async def restore_inventory_item(store: DocumentStore, item_id: str) -> InventoryItem:
    prev = await _get_existing(store, item_id)

    await store.update_one(
        INVENTORY, item_id, {"archived": False}, remove_fields=("archived_at",)
    )

    restored = {**prev, "archived": False, "id": item_id}
    restored.pop("archived_at", None)

    logger.info("Inventory item restored", extra={"item_id": item_id})
    return _map_item(restored)


# =========================
# DELETE
# =========================
async def delete_inventory_item(store: DocumentStore, item_id: str) -> None:
    await _get_existing(store, item_id)
    await store.delete_one(INVENTORY, item_id)
    logger.info("Inventory item deleted", extra={"item_id": item_id})


async def permanently_delete_inventory_item(store: DocumentStore, item_id: str) -> None:
    await delete_inventory_item(store, item_id)
