# app/services/inventory/bulk_service.py
#
# Existence checks run per id outside the atomic write; only the staged
# mutations are committed together. Missing ids are reported, never raised.

import logging
from typing import Callable, Optional

from app.models.enums.bulk_operation import BulkOperation
from app.models.enums.supplier_status import SupplierStatus
from app.schemas.inventory.inventory_item_schemas import (
    BulkOperationResult,
    InventoryItemUpdate,
)
from app.services.inventory.inventory_item_service import utc_now_iso
from app.services.inventory.stock_status import compute_status
from app.services.storage.document_store import (
    INVENTORY,
    SUPPLIERS,
    BatchOp,
    DocumentStore,
    strip_empty,
)
from app.utils.number_utils import to_non_negative_int

logger = logging.getLogger(__name__)

# (collection, doc_id, current document) -> staged op
Stager = Callable[[str, str, dict], BatchOp]


# =========================
# STAGERS
# =========================
def _stage_archive(collection: str, doc_id: str, _: dict) -> BatchOp:
    return BatchOp(
        "update", collection, doc_id, {"archived": True, "archived_at": utc_now_iso()}
    )


def _stage_restore(collection: str, doc_id: str, _: dict) -> BatchOp:
    return BatchOp(
        "update", collection, doc_id, {"archived": False}, remove_fields=("archived_at",)
    )


def _stage_delete(collection: str, doc_id: str, _: dict) -> BatchOp:
    return BatchOp("delete", collection, doc_id)


def _inventory_update_stager(updates: dict) -> Stager:
    updates = strip_empty(updates)
    updates.pop("id", None)
    updates.pop("status", None)
    if "quantity" in updates:
        updates["quantity"] = to_non_negative_int(updates["quantity"])

    def stage(collection: str, doc_id: str, prev: dict) -> BatchOp:
        quantity = updates.get("quantity", prev.get("quantity", 0))
        reorder_required = updates.get(
            "reorder_required", prev.get("reorder_required", False)
        )
        # reorder_level is deliberately not consulted here, unlike the
        # single-item update
        status = compute_status(quantity, reorder_required)
        return BatchOp("update", collection, doc_id, {**updates, "status": status.value})

    return stage


def _supplier_status_stager(status: str) -> Stager:
    def stage(collection: str, doc_id: str, _: dict) -> BatchOp:
        return BatchOp("update", collection, doc_id, {"status": status})

    return stage


STAGERS = {
    BulkOperation.archive: _stage_archive,
    BulkOperation.restore: _stage_restore,
    BulkOperation.delete: _stage_delete,
    BulkOperation.permanently_delete: _stage_delete,
}


# =========================
# COORDINATOR
# =========================
async def _apply(
    store: DocumentStore,
    collection: str,
    label: str,
    ids: list[str],
    stage: Stager,
) -> BulkOperationResult:
    ops: list[BatchOp] = []
    errors: list[str] = []

    for doc_id in ids:
        prev = await store.get_one(collection, doc_id)
        if not prev:
            errors.append(f"{label} {doc_id} not found")
            continue
        ops.append(stage(collection, doc_id, prev))

    await store.batch_write(ops)

    if errors:
        logger.warning(
            "Bulk operation partially applied",
            extra={"collection": collection, "failed": len(errors), "staged": len(ops)},
        )

    return BulkOperationResult(
        success=not errors,
        success_count=len(ops),
        failed_count=len(errors),
        errors=errors or None,
    )


async def bulk_apply(
    store: DocumentStore,
    ids: list[str],
    op: BulkOperation,
    fields: Optional[InventoryItemUpdate | dict] = None,
) -> BulkOperationResult:
    op = BulkOperation(op)

    if op == BulkOperation.update:
        if isinstance(fields, InventoryItemUpdate):
            fields = fields.model_dump(exclude_unset=True)
        stage = _inventory_update_stager(dict(fields or {}))
    else:
        stage = STAGERS[op]

    logger.info("Bulk inventory operation", extra={"op": op.value, "count": len(ids)})
    return await _apply(store, INVENTORY, "Item", ids, stage)


# =========================
# INVENTORY WRAPPERS
# =========================
async def bulk_archive_inventory_items(store: DocumentStore, ids: list[str]):
    return await bulk_apply(store, ids, BulkOperation.archive)


async def bulk_restore_inventory_items(store: DocumentStore, ids: list[str]):
    return await bulk_apply(store, ids, BulkOperation.restore)


async def bulk_delete_inventory_items(store: DocumentStore, ids: list[str]):
    return await bulk_apply(store, ids, BulkOperation.delete)


async def bulk_permanently_delete_inventory_items(store: DocumentStore, ids: list[str]):
    return await bulk_apply(store, ids, BulkOperation.permanently_delete)


async def bulk_update_inventory_items(
    store: DocumentStore,
    ids: list[str],
    updates: InventoryItemUpdate | dict,
):
    return await bulk_apply(store, ids, BulkOperation.update, updates)


# =========================
# SUPPLIERS
# =========================
async def bulk_archive_suppliers(store: DocumentStore, ids: list[str]):
    return await _apply(store, SUPPLIERS, "Supplier", ids, _stage_archive)


async def bulk_restore_suppliers(store: DocumentStore, ids: list[str]):
    return await _apply(store, SUPPLIERS, "Supplier", ids, _stage_restore)


async def bulk_delete_suppliers(store: DocumentStore, ids: list[str]):
    return await _apply(store, SUPPLIERS, "Supplier", ids, _stage_delete)


async def bulk_update_supplier_status(store: DocumentStore, ids: list[str], status: str):
    status = SupplierStatus(status).value
    return await _apply(store, SUPPLIERS, "Supplier", ids, _supplier_status_stager(status))
