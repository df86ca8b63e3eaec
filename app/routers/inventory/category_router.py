# app/routers/inventory/category_router.py

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.schemas.inventory.category_schemas import (
    CategoryDefinition,
    CategoryCreate,
    SubcategoryCreate,
)
from app.services.inventory.category_service import (
    get_categories,
    add_category,
    add_subcategory,
)
from app.services.storage.document_store import DocumentStore
from app.utils.get_store import get_store
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/categories", tags=["Categories"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=APIResponse[List[CategoryDefinition]])
async def list_categories_api(store: DocumentStore = Depends(get_store)):
    categories = await get_categories(store)
    return success_response("Categories fetched successfully", categories)


@router.post("/", response_model=APIResponse[List[CategoryDefinition]])
async def add_category_api(
    payload: CategoryCreate,
    store: DocumentStore = Depends(get_store),
):
    logger.info("Add category", extra={"category": payload.name})
    categories = await add_category(store, payload.name)
    return success_response("Category added successfully", categories)


@router.post(
    "/{category_name}/subcategories",
    response_model=APIResponse[List[CategoryDefinition]],
)
async def add_subcategory_api(
    category_name: str,
    payload: SubcategoryCreate,
    store: DocumentStore = Depends(get_store),
):
    logger.info(
        "Add subcategory",
        extra={"category": category_name, "subcategory": payload.name},
    )
    categories = await add_subcategory(store, category_name, payload.name)
    return success_response("Subcategory added successfully", categories)
