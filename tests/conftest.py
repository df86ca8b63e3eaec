import copy
import os
from collections import defaultdict

import pytest

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("DB_TYPE", "sqlite")

from app.services.storage.document_store import (  # noqa: E402
    INVENTORY,
    SUPPLIERS,
    DocumentStore,
    strip_empty,
)


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store that records every write it performs."""

    def __init__(self):
        self.collections = defaultdict(dict)
        self.writes = []

    async def get_all(self, collection):
        return [
            {**copy.deepcopy(data), "id": doc_id}
            for doc_id, data in sorted(self.collections[collection].items())
        ]

    async def get_one(self, collection, doc_id):
        data = self.collections[collection].get(doc_id)
        return None if data is None else {**copy.deepcopy(data), "id": doc_id}

    async def set_one(self, collection, doc_id, fields):
        data = strip_empty(copy.deepcopy(fields))
        data.pop("id", None)
        self.collections[collection][doc_id] = data
        self.writes.append(("set", collection, doc_id))

    async def update_one(self, collection, doc_id, fields, remove_fields=()):
        if doc_id not in self.collections[collection]:
            raise KeyError(f"{collection}/{doc_id}")
        self._merge(collection, doc_id, fields, remove_fields)
        self.writes.append(("update", collection, doc_id))

    async def delete_one(self, collection, doc_id):
        self.collections[collection].pop(doc_id, None)
        self.writes.append(("delete", collection, doc_id))

    async def batch_write(self, ops):
        for op in ops:
            if op.kind == "delete":
                self.collections[op.collection].pop(op.doc_id, None)
            elif op.doc_id in self.collections[op.collection]:
                self._merge(op.collection, op.doc_id, op.fields, op.remove_fields)
        self.writes.append(("batch", len(ops)))

    def _merge(self, collection, doc_id, fields, remove_fields):
        data = self.collections[collection][doc_id]
        data.update(strip_empty(copy.deepcopy(fields)))
        data.pop("id", None)
        for key in remove_fields:
            data.pop(key, None)

    # ---- test helpers ----
    def doc(self, collection, doc_id):
        return self.collections[collection].get(doc_id)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


def make_item(**overrides):
    item = {
        "name": "Widget",
        "category": "Electronics",
        "quantity": 50,
        "location": "E-01",
        "brand": "Acme",
        "price_per_piece": 10.0,
        "supplier_id": "SUP-001",
        "quantity_purchased": 50,
        "quantity_sold": 0,
        "reorder_required": False,
        "status": "In Stock",
        "archived": False,
    }
    item.update(overrides)
    return item


@pytest.fixture
def seed_item(store):
    def _seed(doc_id, **overrides):
        store.collections[INVENTORY][doc_id] = make_item(**overrides)
        return store.collections[INVENTORY][doc_id]

    return _seed


@pytest.fixture
def seed_supplier(store):
    def _seed(doc_id, name, **overrides):
        supplier = {
            "name": name,
            "contact": "",
            "email": "",
            "phone": "",
            "category": "General",
            "status": "Active",
            "purchases": 0,
            "payments": 0,
            "balance": 0,
            "archived": False,
        }
        supplier.update(overrides)
        store.collections[SUPPLIERS][doc_id] = supplier
        return supplier

    return _seed
