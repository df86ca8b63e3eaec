import pytest

from app.constants.inventory import DEFAULT_CATEGORIES
from app.core.exceptions import ConflictException, NotFoundException
from app.services.inventory.category_service import (
    add_category,
    add_subcategory,
    get_categories,
)
from app.services.storage.document_store import CATEGORIES


async def test_defaults_are_seeded_once(store):
    categories = await get_categories(store)

    assert {c.name for c in categories} == set(DEFAULT_CATEGORIES)
    seeded_writes = len(store.writes)

    await get_categories(store)
    assert len(store.writes) == seeded_writes


async def test_add_category(store):
    categories = await add_category(store, "  Tools ")

    assert "Tools" in [c.name for c in categories]
    assert store.doc(CATEGORIES, "Tools") == {"name": "Tools", "subcategories": []}


async def test_add_category_conflict_is_case_insensitive(store):
    await get_categories(store)
    with pytest.raises(ConflictException):
        await add_category(store, "electronics")


async def test_add_subcategory(store):
    categories = await add_subcategory(store, "Furniture", "Stools")

    furniture = next(c for c in categories if c.name == "Furniture")
    assert furniture.subcategories[-1] == "Stools"
    assert "Stools" in store.doc(CATEGORIES, "Furniture")["subcategories"]


async def test_add_subcategory_unknown_category(store):
    with pytest.raises(NotFoundException):
        await add_subcategory(store, "Garden", "Hoses")


async def test_add_subcategory_duplicate(store):
    with pytest.raises(ConflictException):
        await add_subcategory(store, "Electronics", "phones")


async def test_add_subcategory_matches_category_case_insensitively(store):
    categories = await add_subcategory(store, " electronics ", "Cameras")

    electronics = next(c for c in categories if c.name == "Electronics")
    assert electronics.subcategories[-1] == "Cameras"
    assert "Cameras" in store.doc(CATEGORIES, "Electronics")["subcategories"]
    assert store.doc(CATEGORIES, "electronics") is None
