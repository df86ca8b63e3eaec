from app.schemas.inventory.inventory_item_schemas import InventoryItem
from app.services.inventory.stats_service import compute_inventory_stats


def _item(item_id, quantity, **extra):
    return InventoryItem(
        id=item_id,
        name=item_id,
        category=extra.pop("category", "Electronics"),
        quantity=quantity,
        price_per_piece=extra.pop("price", 2.5),
        **extra,
    )


def test_stats_counters():
    items = [
        _item("INV-001", 0),
        _item("INV-002", 5),
        _item("INV-003", 50, reorder_required=True, category="Furniture"),
        _item("INV-004", 250),
        _item("INV-005", 999, archived=True),
    ]

    stats = compute_inventory_stats(
        items, ["Electronics", "Furniture", "Clothing"], overstock_threshold=200
    )

    assert stats.total_items == 4
    assert stats.total_quantity == 305
    assert stats.total_value == 762.5
    assert stats.out_of_stock_count == 1
    assert stats.critical_count == 1
    assert stats.low_stock_count == 1
    assert stats.overstock_count == 1
    assert stats.in_stock_count == 2
    assert stats.health_rate == 50
    assert stats.category_breakdown == {"Electronics": 3, "Furniture": 1, "Clothing": 0}


def test_stats_empty_inventory():
    stats = compute_inventory_stats([], [])
    assert stats.total_items == 0
    assert stats.health_rate == 0
