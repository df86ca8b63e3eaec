import pytest

from app.core.exceptions import (
    DuplicateIdException,
    NotFoundException,
    ValidationException,
)
from app.schemas.masters.supplier_schemas import SupplierCreate, SupplierUpdate
from app.services.masters.supplier_service import (
    archive_supplier,
    create_supplier,
    delete_supplier,
    get_supplier,
    list_suppliers,
    restore_supplier,
    update_supplier,
)
from app.services.storage.document_store import SUPPLIERS


async def test_create_generates_sequential_id(store, seed_supplier):
    seed_supplier("SUP-004", "Acme")

    supplier = await create_supplier(
        store, SupplierCreate(name=" Globex ", purchases=500, payments=120)
    )

    assert supplier.id == "SUP-005"
    assert supplier.name == "Globex"
    assert supplier.balance == 380
    assert supplier.status == "Active"
    assert store.doc(SUPPLIERS, "SUP-005")["balance"] == 380


async def test_create_rejects_duplicate_id(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")
    with pytest.raises(DuplicateIdException):
        await create_supplier(store, SupplierCreate(id="SUP-001", name="Other"))


async def test_create_requires_name(store):
    with pytest.raises(ValidationException):
        await create_supplier(store, SupplierCreate(name="  "))


async def test_update_recomputes_balance(store, seed_supplier):
    seed_supplier("SUP-001", "Acme", purchases=100, payments=20, balance=80)

    supplier = await update_supplier(store, "SUP-001", SupplierUpdate(payments=60))

    assert supplier.balance == 40
    stored = store.doc(SUPPLIERS, "SUP-001")
    assert stored["balance"] == 40
    assert stored["name"] == "Acme"


async def test_update_status(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")
    supplier = await update_supplier(store, "SUP-001", SupplierUpdate(status="Inactive"))
    assert supplier.status == "Inactive"
    assert store.doc(SUPPLIERS, "SUP-001")["status"] == "Inactive"


async def test_update_missing_supplier(store):
    with pytest.raises(NotFoundException):
        await update_supplier(store, "SUP-404", SupplierUpdate(name="X"))
    assert store.writes == []


async def test_archive_restore_and_list(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")
    seed_supplier("SUP-002", "Globex")

    await archive_supplier(store, "SUP-002")

    everything = await list_suppliers(store)
    assert everything.total == 2

    active = await list_suppliers(store, include_archived=False)
    assert [s.id for s in active.items] == ["SUP-001"]

    restored = await restore_supplier(store, "SUP-002")
    assert restored.archived is False
    assert "archived_at" not in store.doc(SUPPLIERS, "SUP-002")


async def test_list_search_and_sort(store, seed_supplier):
    seed_supplier("SUP-001", "Zeta Traders", email="z@zeta.io")
    seed_supplier("SUP-002", "Alpha Supply", email="hello@alpha.io")

    data = await list_suppliers(store, search="alpha")
    assert [s.id for s in data.items] == ["SUP-002"]

    data = await list_suppliers(store, sort_by="name")
    assert [s.name for s in data.items] == ["Alpha Supply", "Zeta Traders"]


async def test_delete(store, seed_supplier):
    seed_supplier("SUP-001", "Acme")
    await delete_supplier(store, "SUP-001")
    with pytest.raises(NotFoundException):
        await get_supplier(store, "SUP-001")
