# app/services/storage/document_store.py

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.storage.document_models import Document

logger = logging.getLogger(__name__)

# Collection names
INVENTORY = "inventory"
SUPPLIERS = "suppliers"
CATEGORIES = "categories"


def strip_empty(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None; the store never holds absent-value markers."""
    return {k: v for k, v in fields.items() if v is not None}


@dataclass
class BatchOp:
    kind: Literal["update", "delete"]
    collection: str
    doc_id: str
    fields: dict[str, Any] = field(default_factory=dict)
    remove_fields: tuple[str, ...] = ()


# =====================================================
# INTERFACE
# =====================================================
class DocumentStore(ABC):
    """CRUD + atomic batch primitives over keyed JSON documents.

    Documents come back as plain dicts carrying their key under ``id``.
    Writes are last-write-wins.
    """

    @abstractmethod
    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        ...

    @abstractmethod
    async def get_one(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        ...

    @abstractmethod
    async def set_one(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def update_one(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        remove_fields: Iterable[str] = (),
    ) -> None:
        ...

    @abstractmethod
    async def delete_one(self, collection: str, doc_id: str) -> None:
        ...

    @abstractmethod
    async def batch_write(self, ops: list[BatchOp]) -> None:
        """Commit every op together, or none of them."""


# =====================================================
# SQLALCHEMY IMPLEMENTATION
# =====================================================
def _as_dict(row: Document) -> dict[str, Any]:
    return {**(row.data or {}), "id": row.doc_id}


def _merge(data: dict, fields: dict, remove_fields: Iterable[str]) -> dict:
    merged = {**(data or {}), **strip_empty(fields)}
    for key in remove_fields:
        merged.pop(key, None)
    merged.pop("id", None)
    return merged


class SqlDocumentStore(DocumentStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, collection: str) -> list[dict[str, Any]]:
        rows = (
            await self.db.execute(
                select(Document)
                .where(Document.collection == collection)
                .order_by(Document.doc_id)
            )
        ).scalars().all()
        return [_as_dict(r) for r in rows]

    async def get_one(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        row = await self.db.get(Document, (collection, doc_id))
        return _as_dict(row) if row else None

    async def set_one(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        data = strip_empty(fields)
        data.pop("id", None)

        row = await self.db.get(Document, (collection, doc_id))
        if row:
            row.data = data
        else:
            self.db.add(Document(collection=collection, doc_id=doc_id, data=data))

        await self._commit()

    async def update_one(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        remove_fields: Iterable[str] = (),
    ) -> None:
        row = await self.db.get(Document, (collection, doc_id))
        if not row:
            raise KeyError(f"{collection}/{doc_id}")

        # reassign so the JSON column is flagged dirty
        row.data = _merge(row.data, fields, remove_fields)
        await self._commit()

    async def delete_one(self, collection: str, doc_id: str) -> None:
        row = await self.db.get(Document, (collection, doc_id))
        if row:
            await self.db.delete(row)
            await self._commit()

    async def batch_write(self, ops: list[BatchOp]) -> None:
        if not ops:
            return

        for op in ops:
            row = await self.db.get(Document, (op.collection, op.doc_id))
            if not row:
                # vanished between the pre-check and the commit
                logger.warning(
                    "Batch target missing, skipped",
                    extra={"collection": op.collection, "doc_id": op.doc_id},
                )
                continue

            if op.kind == "delete":
                await self.db.delete(row)
            else:
                row.data = _merge(row.data, op.fields, op.remove_fields)

        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
