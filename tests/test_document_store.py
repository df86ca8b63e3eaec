import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import Base
from app.services.storage.document_store import (
    INVENTORY,
    SUPPLIERS,
    BatchOp,
    SqlDocumentStore,
)


@pytest.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def sql_store(session_factory):
    async with session_factory() as session:
        yield SqlDocumentStore(session)


async def test_set_and_get(sql_store):
    await sql_store.set_one(INVENTORY, "INV-001", {"name": "Lamp", "reorder_level": None})

    doc = await sql_store.get_one(INVENTORY, "INV-001")
    assert doc == {"name": "Lamp", "id": "INV-001"}
    assert await sql_store.get_one(INVENTORY, "INV-002") is None


async def test_collections_are_isolated(sql_store):
    await sql_store.set_one(INVENTORY, "X-1", {"name": "item"})
    await sql_store.set_one(SUPPLIERS, "X-1", {"name": "supplier"})

    assert [d["name"] for d in await sql_store.get_all(INVENTORY)] == ["item"]
    assert [d["name"] for d in await sql_store.get_all(SUPPLIERS)] == ["supplier"]


async def test_get_all_is_ordered_by_id(sql_store):
    for doc_id in ("INV-003", "INV-001", "INV-002"):
        await sql_store.set_one(INVENTORY, doc_id, {"name": doc_id})

    assert [d["id"] for d in await sql_store.get_all(INVENTORY)] == [
        "INV-001",
        "INV-002",
        "INV-003",
    ]


async def test_set_one_replaces_document(sql_store):
    await sql_store.set_one(INVENTORY, "INV-001", {"name": "Lamp", "brand": "Lumo"})
    await sql_store.set_one(INVENTORY, "INV-001", {"name": "Lamp v2"})

    assert await sql_store.get_one(INVENTORY, "INV-001") == {"name": "Lamp v2", "id": "INV-001"}


async def test_update_merges_and_removes_fields(sql_store):
    await sql_store.set_one(
        INVENTORY, "INV-001", {"name": "Lamp", "archived": True, "archived_at": "t"}
    )

    await sql_store.update_one(
        INVENTORY, "INV-001", {"archived": False, "brand": None}, remove_fields=("archived_at",)
    )

    assert await sql_store.get_one(INVENTORY, "INV-001") == {
        "name": "Lamp",
        "archived": False,
        "id": "INV-001",
    }


async def test_update_missing_document_raises(sql_store):
    with pytest.raises(KeyError):
        await sql_store.update_one(INVENTORY, "INV-404", {"name": "x"})


async def test_delete_one(sql_store):
    await sql_store.set_one(INVENTORY, "INV-001", {"name": "Lamp"})
    await sql_store.delete_one(INVENTORY, "INV-001")
    await sql_store.delete_one(INVENTORY, "INV-001")

    assert await sql_store.get_all(INVENTORY) == []


async def test_batch_write_applies_updates_and_deletes(sql_store):
    await sql_store.set_one(INVENTORY, "INV-001", {"name": "A"})
    await sql_store.set_one(INVENTORY, "INV-002", {"name": "B"})

    await sql_store.batch_write(
        [
            BatchOp("update", INVENTORY, "INV-001", {"archived": True}),
            BatchOp("delete", INVENTORY, "INV-002"),
            BatchOp("update", INVENTORY, "INV-999", {"archived": True}),
        ]
    )

    docs = await sql_store.get_all(INVENTORY)
    assert docs == [{"name": "A", "archived": True, "id": "INV-001"}]


async def test_batch_write_with_no_ops(sql_store):
    await sql_store.batch_write([])
    assert await sql_store.get_all(INVENTORY) == []


async def test_batch_write_is_all_or_nothing_when_commit_fails(
    session_factory, sql_store, monkeypatch
):
    await sql_store.set_one(INVENTORY, "INV-001", {"name": "A"})
    await sql_store.set_one(INVENTORY, "INV-002", {"name": "B"})

    session = sql_store.db
    rollbacks = []
    real_rollback = session.rollback

    async def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk full"))

    async def recording_rollback():
        rollbacks.append(True)
        await real_rollback()

    monkeypatch.setattr(session, "commit", failing_commit)
    monkeypatch.setattr(session, "rollback", recording_rollback)

    with pytest.raises(SQLAlchemyError):
        await sql_store.batch_write(
            [
                BatchOp("update", INVENTORY, "INV-001", {"archived": True}),
                BatchOp("delete", INVENTORY, "INV-002"),
            ]
        )

    assert rollbacks == [True]

    async with session_factory() as fresh:
        docs = await SqlDocumentStore(fresh).get_all(INVENTORY)
    assert docs == [
        {"name": "A", "id": "INV-001"},
        {"name": "B", "id": "INV-002"},
    ]
