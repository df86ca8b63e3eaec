# app/schemas/inventory/import_schemas.py

from pydantic import BaseModel
from typing import Optional, List

from app.constants.inventory import DEFAULT_BRAND
from app.schemas.inventory.inventory_item_schemas import InventoryItem


class ImportDraft(BaseModel):
    """A validated spreadsheet row, not yet reconciled against suppliers/locations."""

    row_number: int
    name: str
    category: str
    subcategory: Optional[str] = None
    quantity: int = 0
    price_per_piece: float = 0
    brand: str = DEFAULT_BRAND
    # raw supplier reference: an existing id, a name, or blank
    supplier: str = ""
    location: str = ""
    description: Optional[str] = None
    photo_url: Optional[str] = None
    quantity_purchased: int = 0
    quantity_sold: int = 0
    reorder_required: bool = False


class ImportPreview(BaseModel):
    items: List[ImportDraft]
    errors: List[str]


class ImportConfirmPayload(BaseModel):
    items: List[ImportDraft]


class ImportResult(BaseModel):
    created_count: int
    suppliers_created: int
    items: List[InventoryItem]
    errors: Optional[List[str]] = None
