# app/services/inventory/category_service.py
#
# Categories live in the store keyed by name. Items reference them by name
# only, so nothing cascades from here.

import logging
from app.constants.error_codes import ErrorCode
from app.constants.inventory import DEFAULT_CATEGORIES
from app.core.exceptions import ConflictException, NotFoundException, ValidationException
from app.schemas.inventory.category_schemas import CategoryDefinition
from app.services.storage.document_store import CATEGORIES, DocumentStore

logger = logging.getLogger(__name__)


def _map_category(doc: dict) -> CategoryDefinition:
    return CategoryDefinition(
        name=doc.get("name") or doc["id"],
        subcategories=list(doc.get("subcategories") or []),
    )


async def get_categories(store: DocumentStore) -> list[CategoryDefinition]:
    docs = await store.get_all(CATEGORIES)

    if not docs:
        logger.info("Seeding default categories")
        for name, subcategories in DEFAULT_CATEGORIES.items():
            await store.set_one(
                CATEGORIES, name, {"name": name, "subcategories": list(subcategories)}
            )
        docs = await store.get_all(CATEGORIES)

    return [_map_category(d) for d in docs]


async def add_category(store: DocumentStore, name: str) -> list[CategoryDefinition]:
    name = name.strip()
    if not name:
        raise ValidationException("Category name is required")

    categories = await get_categories(store)
    if any(c.name.lower() == name.lower() for c in categories):
        raise ConflictException(
            f'Category "{name}" already exists', ErrorCode.CATEGORY_EXISTS
        )

    await store.set_one(CATEGORIES, name, {"name": name, "subcategories": []})
    logger.info("Category added", extra={"category": name})

    return [*categories, CategoryDefinition(name=name, subcategories=[])]


async def add_subcategory(
    store: DocumentStore,
    category_name: str,
    subcategory_name: str,
) -> list[CategoryDefinition]:
    subcategory_name = subcategory_name.strip()
    if not subcategory_name:
        raise ValidationException("Subcategory name is required")

    categories = await get_categories(store)
    category = next(
        (c for c in categories if c.name.lower() == category_name.strip().lower()), None
    )
    if not category:
        raise NotFoundException(
            f'Category "{category_name}" not found', ErrorCode.CATEGORY_NOT_FOUND
        )

    if any(s.lower() == subcategory_name.lower() for s in category.subcategories):
        raise ConflictException(
            f'Subcategory "{subcategory_name}" already exists in "{category.name}"',
            ErrorCode.SUBCATEGORY_EXISTS,
        )

    category.subcategories.append(subcategory_name)
    await store.update_one(
        CATEGORIES, category.name, {"subcategories": category.subcategories}
    )
    logger.info(
        "Subcategory added",
        extra={"category": category.name, "subcategory": subcategory_name},
    )

    return categories
