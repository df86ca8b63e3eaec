import pytest

from app.models.enums.stock_status import StockStatus
from app.services.inventory.stock_status import compute_status, is_overstock


@pytest.mark.parametrize(
    "quantity, reorder_required, reorder_level, expected",
    [
        (0, False, None, StockStatus.critical),
        (-4, False, None, StockStatus.critical),
        (0, True, 10, StockStatus.critical),
        (5, False, 10, StockStatus.low_stock),
        (10, False, 10, StockStatus.low_stock),
        (5, False, None, StockStatus.in_stock),
        (5, True, None, StockStatus.low_stock),
        (11, False, 10, StockStatus.in_stock),
        (11, True, 10, StockStatus.low_stock),
    ],
)
def test_compute_status_rules(quantity, reorder_required, reorder_level, expected):
    assert compute_status(quantity, reorder_required, reorder_level) == expected


def test_status_values_match_display_labels():
    assert compute_status(0, False) == "Critical"
    assert compute_status(5, False, 10) == "Low Stock"
    assert compute_status(5, False) == "In Stock"
    assert compute_status(5, True) == "Low Stock"


def test_overstock_is_not_a_derived_status():
    assert "Overstock" not in {s.value for s in StockStatus}
    assert compute_status(5000, False) == StockStatus.in_stock


def test_is_overstock_threshold():
    assert is_overstock(201)
    assert not is_overstock(200)
    assert is_overstock(51, threshold=50)
