# app/schemas/inventory/inventory_item_schemas.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict

from app.models.enums.stock_status import StockStatus
from app.utils.number_utils import (
    to_non_negative_int,
    to_non_negative_float,
    optional_non_negative_int,
)

COUNT_FIELDS = ("quantity", "quantity_purchased", "quantity_sold")


class InventoryItem(BaseModel):
    id: str
    name: str
    category: str
    subcategory: Optional[str] = None
    quantity: int = 0
    location: str = ""
    brand: str = ""
    price_per_piece: float = 0
    supplier_id: str = ""
    quantity_purchased: int = 0
    quantity_sold: int = 0
    reorder_required: bool = False
    reorder_level: Optional[int] = None
    status: StockStatus = StockStatus.in_stock
    photo_url: Optional[str] = None
    description: Optional[str] = None
    archived: bool = False
    archived_at: Optional[str] = None

    class Config:
        from_attributes = True
        use_enum_values = True


class InventoryItemCreate(BaseModel):
    id: Optional[str] = None
    name: str
    category: str
    subcategory: Optional[str] = None
    quantity: int = 0
    location: str = ""
    brand: str = ""
    price_per_piece: float = 0
    supplier_id: str = ""
    quantity_purchased: int = 0
    quantity_sold: int = 0
    reorder_required: bool = False
    reorder_level: Optional[int] = None
    photo_url: Optional[str] = None
    description: Optional[str] = None

    @field_validator(*COUNT_FIELDS, mode="before")
    @classmethod
    def _counts(cls, v):
        return to_non_negative_int(v)

    @field_validator("price_per_piece", mode="before")
    @classmethod
    def _price(cls, v):
        return to_non_negative_float(v)

    @field_validator("reorder_level", mode="before")
    @classmethod
    def _reorder_level(cls, v):
        return optional_non_negative_int(v)

    @field_validator("location", "brand", "supplier_id", mode="before")
    @classmethod
    def _blank_strings(cls, v):
        return "" if v is None else v


class InventoryItemUpdate(BaseModel):
    """Partial update; fields left out keep their stored value."""

    name: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    quantity: Optional[int] = None
    location: Optional[str] = None
    brand: Optional[str] = None
    price_per_piece: Optional[float] = None
    supplier_id: Optional[str] = None
    quantity_purchased: Optional[int] = None
    quantity_sold: Optional[int] = None
    reorder_required: Optional[bool] = None
    reorder_level: Optional[int] = None
    photo_url: Optional[str] = None
    description: Optional[str] = None

    @field_validator(*COUNT_FIELDS, mode="before")
    @classmethod
    def _counts(cls, v):
        return None if v is None else to_non_negative_int(v)

    @field_validator("price_per_piece", mode="before")
    @classmethod
    def _price(cls, v):
        return None if v is None else to_non_negative_float(v)

    @field_validator("reorder_level", mode="before")
    @classmethod
    def _reorder_level(cls, v):
        return optional_non_negative_int(v)


class InventoryListData(BaseModel):
    total: int
    items: List[InventoryItem]


# =========================
# BULK
# =========================
class BulkIdsPayload(BaseModel):
    ids: List[str] = Field(min_length=1)


class BulkUpdatePayload(BulkIdsPayload):
    updates: InventoryItemUpdate


class BulkOperationResult(BaseModel):
    success: bool
    success_count: int
    failed_count: int
    errors: Optional[List[str]] = None


# =========================
# STATS
# =========================
class InventoryStats(BaseModel):
    total_items: int
    total_quantity: int
    total_value: float
    in_stock_count: int
    low_stock_count: int
    critical_count: int
    out_of_stock_count: int
    overstock_count: int
    category_breakdown: Dict[str, int]
    health_rate: int
