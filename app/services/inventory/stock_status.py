# app/services/inventory/stock_status.py

from typing import Optional

from app.core.config import OVERSTOCK_THRESHOLD
from app.models.enums.stock_status import StockStatus


def compute_status(
    quantity: int,
    reorder_required: bool,
    reorder_level: Optional[int] = None,
) -> StockStatus:
    # first matching rule wins
    if quantity <= 0:
        return StockStatus.critical
    if reorder_level is not None and quantity <= reorder_level:
        return StockStatus.low_stock
    if reorder_required:
        return StockStatus.low_stock
    return StockStatus.in_stock


def is_overstock(quantity: int, threshold: int = OVERSTOCK_THRESHOLD) -> bool:
    """Dashboard-only designation; never written to an item."""
    return quantity > threshold
