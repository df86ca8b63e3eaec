import pytest

from app.models.enums.bulk_operation import BulkOperation
from app.schemas.inventory.inventory_item_schemas import InventoryItemUpdate
from app.services.inventory.bulk_service import (
    bulk_apply,
    bulk_archive_inventory_items,
    bulk_archive_suppliers,
    bulk_delete_suppliers,
    bulk_permanently_delete_inventory_items,
    bulk_restore_inventory_items,
    bulk_update_inventory_items,
    bulk_update_supplier_status,
)
from app.services.storage.document_store import INVENTORY, SUPPLIERS


async def test_archive_reports_missing_ids_and_commits_once(store, seed_item):
    seed_item("INV-001")
    seed_item("INV-003")

    result = await bulk_archive_inventory_items(store, ["INV-001", "INV-002", "INV-003"])

    assert result.success is False
    assert result.success_count == 2
    assert result.failed_count == 1
    assert result.errors == ["Item INV-002 not found"]
    assert store.doc(INVENTORY, "INV-001")["archived"] is True
    assert store.doc(INVENTORY, "INV-003")["archived"] is True
    assert store.writes == [("batch", 2)]


async def test_all_found_has_no_errors(store, seed_item):
    seed_item("INV-001", archived=True, archived_at="2024-01-01T00:00:00+00:00")

    result = await bulk_restore_inventory_items(store, ["INV-001"])

    assert result.success is True
    assert result.errors is None
    assert "archived_at" not in store.doc(INVENTORY, "INV-001")


async def test_all_missing_still_returns_result(store):
    result = await bulk_archive_inventory_items(store, ["INV-100", "INV-101"])

    assert result.success_count == 0
    assert result.failed_count == 2
    assert store.collections[INVENTORY] == {}


async def test_permanent_delete(store, seed_item):
    seed_item("INV-001")
    seed_item("INV-002")

    result = await bulk_permanently_delete_inventory_items(store, ["INV-001", "INV-002"])

    assert result.success_count == 2
    assert store.collections[INVENTORY] == {}


async def test_bulk_apply_accepts_operation_value(store, seed_item):
    seed_item("INV-001")
    result = await bulk_apply(store, ["INV-001"], "delete")
    assert result.success_count == 1
    assert store.doc(INVENTORY, "INV-001") is None


async def test_bulk_apply_rejects_unknown_operation(store):
    with pytest.raises(ValueError):
        await bulk_apply(store, ["INV-001"], "explode")


# ---------------- update ----------------
async def test_update_recomputes_status_per_item(store, seed_item):
    seed_item("INV-001", quantity=50, reorder_required=False)
    seed_item("INV-002", quantity=50, reorder_required=True, status="Low Stock")

    result = await bulk_update_inventory_items(
        store, ["INV-001", "INV-002"], InventoryItemUpdate(quantity=20)
    )

    assert result.success_count == 2
    assert store.doc(INVENTORY, "INV-001")["status"] == "In Stock"
    assert store.doc(INVENTORY, "INV-002")["status"] == "Low Stock"
    assert store.doc(INVENTORY, "INV-001")["quantity"] == 20


async def test_update_ignores_reorder_level(store, seed_item):
    seed_item("INV-001", quantity=50, reorder_level=30)

    await bulk_update_inventory_items(store, ["INV-001"], {"quantity": 20})

    stored = store.doc(INVENTORY, "INV-001")
    assert stored["status"] == "In Stock"
    assert stored["reorder_required"] is False


async def test_update_to_zero_is_critical(store, seed_item):
    seed_item("INV-001", quantity=50)
    await bulk_update_inventory_items(store, ["INV-001"], {"quantity": 0})
    assert store.doc(INVENTORY, "INV-001")["status"] == "Critical"


async def test_update_without_quantity_keeps_stored_quantity(store, seed_item):
    seed_item("INV-001", quantity=7)

    await bulk_update_inventory_items(
        store, ["INV-001"], InventoryItemUpdate(reorder_required=True)
    )

    stored = store.doc(INVENTORY, "INV-001")
    assert stored["quantity"] == 7
    assert stored["status"] == "Low Stock"


async def test_update_never_takes_status_from_caller(store, seed_item):
    seed_item("INV-001", quantity=0)
    await bulk_update_inventory_items(store, ["INV-001"], {"status": "In Stock", "brand": "Z"})
    stored = store.doc(INVENTORY, "INV-001")
    assert stored["status"] == "Critical"
    assert stored["brand"] == "Z"


def test_operation_values():
    assert BulkOperation("permanently_delete") is BulkOperation.permanently_delete


# ---------------- suppliers ----------------
async def test_supplier_bulk_archive_reports_missing(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")

    result = await bulk_archive_suppliers(store, ["SUP-001", "SUP-404"])

    assert result.errors == ["Supplier SUP-404 not found"]
    assert store.doc(SUPPLIERS, "SUP-001")["archived"] is True


async def test_supplier_bulk_status(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")
    seed_supplier("SUP-002", "Globex")

    result = await bulk_update_supplier_status(store, ["SUP-001", "SUP-002"], "Inactive")

    assert result.success is True
    assert store.doc(SUPPLIERS, "SUP-001")["status"] == "Inactive"
    assert store.doc(SUPPLIERS, "SUP-002")["status"] == "Inactive"


async def test_supplier_bulk_status_rejects_unknown_status(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")
    with pytest.raises(ValueError):
        await bulk_update_supplier_status(store, ["SUP-001"], "Dormant")
    assert store.writes == []


async def test_supplier_bulk_delete(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")
    result = await bulk_delete_suppliers(store, ["SUP-001"])
    assert result.success_count == 1
    assert store.doc(SUPPLIERS, "SUP-001") is None
