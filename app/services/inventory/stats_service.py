# app/services/inventory/stats_service.py

from typing import Iterable

from app.core.config import CRITICAL_STOCK_THRESHOLD, OVERSTOCK_THRESHOLD
from app.schemas.inventory.inventory_item_schemas import InventoryItem, InventoryStats
from app.services.inventory.stock_status import is_overstock


def compute_inventory_stats(
    items: Iterable[InventoryItem],
    category_names: Iterable[str],
    *,
    overstock_threshold: int = OVERSTOCK_THRESHOLD,
    critical_threshold: int = CRITICAL_STOCK_THRESHOLD,
) -> InventoryStats:
    """Dashboard counters over the active (non-archived) items.

    These counts follow their own thresholds and are not derived from the
    stored ``status``; ``overstock_count`` exists only here.
    """
    items = [i for i in items if not i.archived]
    total = len(items)

    healthy = sum(1 for i in items if i.quantity > 0 and not i.reorder_required)

    return InventoryStats(
        total_items=total,
        total_quantity=sum(i.quantity for i in items),
        total_value=round(sum(i.price_per_piece * i.quantity for i in items), 2),
        in_stock_count=healthy,
        low_stock_count=sum(1 for i in items if i.reorder_required and i.quantity > 0),
        critical_count=sum(1 for i in items if 0 < i.quantity <= critical_threshold),
        out_of_stock_count=sum(1 for i in items if i.quantity == 0),
        overstock_count=sum(
            1 for i in items if is_overstock(i.quantity, overstock_threshold)
        ),
        category_breakdown={
            name: sum(1 for i in items if i.category == name) for name in category_names
        },
        health_rate=round(healthy / total * 100) if total else 0,
    )
