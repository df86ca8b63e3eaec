import logging
from typing import Optional

from app.constants.error_codes import ErrorCode
from app.core.exceptions import (
    DuplicateIdException,
    NotFoundException,
    ValidationException,
)
from app.schemas.masters.supplier_schemas import (
    SupplierCreate,
    SupplierUpdate,
    SupplierOut,
    SupplierListData,
)
from app.services.inventory.code_generator import next_supplier_id
from app.services.inventory.inventory_item_service import utc_now_iso
from app.services.storage.document_store import SUPPLIERS, DocumentStore, strip_empty

logger = logging.getLogger(__name__)

ALLOWED_SORT_FIELDS = {"id", "name", "category", "status", "balance"}
TEXT_FIELDS = ("name", "contact", "email", "phone", "category", "country", "city", "address")


# =========================
# MAPPER
# =========================
def _map_supplier(doc: dict) -> SupplierOut:
    purchases = doc.get("purchases") or 0
    payments = doc.get("payments") or 0
    return SupplierOut(
        id=doc["id"],
        name=doc.get("name", ""),
        contact=doc.get("contact", ""),
        email=doc.get("email", ""),
        phone=doc.get("phone", ""),
        category=doc.get("category", ""),
        status=doc.get("status") or "Active",
        country=doc.get("country", ""),
        city=doc.get("city", ""),
        address=doc.get("address", ""),
        purchases=purchases,
        payments=payments,
        balance=doc.get("balance", purchases - payments),
        archived=doc.get("archived") or False,
        archived_at=doc.get("archived_at"),
    )


async def _get_existing(store: DocumentStore, supplier_id: str) -> dict:
    doc = await store.get_one(SUPPLIERS, supplier_id)
    if not doc:
        raise NotFoundException("Supplier not found", ErrorCode.SUPPLIER_NOT_FOUND)
    return doc


# =========================
# LIST / GET
# =========================
async def list_suppliers(
    store: DocumentStore,
    *,
    search: Optional[str] = None,
    include_archived: bool = True,
    sort_by: str = "id",
    sort_order: str = "asc",
) -> SupplierListData:
    if sort_by not in ALLOWED_SORT_FIELDS:
        raise ValidationException("Invalid sort field")

    suppliers = [_map_supplier(d) for d in await store.get_all(SUPPLIERS)]

    if not include_archived:
        suppliers = [s for s in suppliers if not s.archived]

    if search:
        needle = search.strip().lower()
        suppliers = [
            s for s in suppliers
            if needle in s.name.lower()
            or needle in s.email.lower()
            or needle in s.phone.lower()
        ]

    suppliers.sort(
        key=lambda s: getattr(s, sort_by),
        reverse=sort_order.lower() == "desc",
    )
    return SupplierListData(total=len(suppliers), items=suppliers)


async def get_supplier(store: DocumentStore, supplier_id: str) -> SupplierOut:
    return _map_supplier(await _get_existing(store, supplier_id))


# =========================
# CREATE
# =========================
async def create_supplier(store: DocumentStore, payload: SupplierCreate) -> SupplierOut:
    name = payload.name.strip()
    if not name:
        raise ValidationException("Supplier name is required")

    supplier_id = (payload.id or "").strip()
    if not supplier_id:
        existing = await store.get_all(SUPPLIERS)
        supplier_id = next_supplier_id(d["id"] for d in existing)

    if await store.get_one(SUPPLIERS, supplier_id):
        raise DuplicateIdException(
            f"Supplier with id {supplier_id} already exists", supplier_id
        )

    supplier = {
        **{f: getattr(payload, f).strip() for f in TEXT_FIELDS},
        "name": name,
        "status": payload.status.value,
        "purchases": payload.purchases,
        "payments": payload.payments,
        "balance": payload.purchases - payload.payments,
        "archived": False,
    }
    supplier = strip_empty(supplier)

    await store.set_one(SUPPLIERS, supplier_id, supplier)

    logger.info(
        "Supplier created",
        extra={"supplier_id": supplier_id, "supplier_name": name},
    )
    return _map_supplier({**supplier, "id": supplier_id})


# =========================
# UPDATE
# =========================
async def update_supplier(
    store: DocumentStore,
    supplier_id: str,
    payload: SupplierUpdate,
) -> SupplierOut:
    prev = await _get_existing(store, supplier_id)

    updates = strip_empty(payload.model_dump(exclude_unset=True, mode="json"))
    for field in TEXT_FIELDS:
        if field in updates:
            updates[field] = updates[field].strip()

    if "name" in updates and not updates["name"]:
        raise ValidationException("Supplier name is required")

    merged = {**prev, **updates}
    merged["balance"] = (merged.get("purchases") or 0) - (merged.get("payments") or 0)
    merged.pop("id", None)

    await store.update_one(SUPPLIERS, supplier_id, merged)

    logger.info(
        "Supplier updated",
        extra={"supplier_id": supplier_id, "fields": sorted(updates)},
    )
    return _map_supplier({**merged, "id": supplier_id})


# =========================
# ARCHIVE / RESTORE / DELETE
# =========================
async def archive_supplier(store: DocumentStore, supplier_id: str) -> SupplierOut:
    prev = await _get_existing(store, supplier_id)

    changes = {"archived": True, "archived_at": utc_now_iso()}
    await store.update_one(SUPPLIERS, supplier_id, changes)

    logger.info("Supplier archived", extra={"supplier_id": supplier_id})
    return _map_supplier({**prev, **changes, "id": supplier_id})


async def restore_supplier(store: DocumentStore, supplier_id: str) -> SupplierOut:
    prev = await _get_existing(store, supplier_id)

    await store.update_one(
        SUPPLIERS, supplier_id, {"archived": False}, remove_fields=("archived_at",)
    )

    restored = {**prev, "archived": False, "id": supplier_id}
    restored.pop("archived_at", None)

    logger.info("Supplier restored", extra={"supplier_id": supplier_id})
    return _map_supplier(restored)


async def delete_supplier(store: DocumentStore, supplier_id: str) -> None:
    await _get_existing(store, supplier_id)
    await store.delete_one(SUPPLIERS, supplier_id)
    logger.info("Supplier deleted", extra={"supplier_id": supplier_id})
