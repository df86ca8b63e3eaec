# app/services/inventory/code_generator.py
#
# Sequential codes are allocated by scanning what already exists, so two
# concurrent creators can receive the same code. Creates detect id
# collisions with a point read before writing.

import re
from typing import Iterable, Mapping, Optional

from app.constants.inventory import (
    CATEGORY_LOCATION_PREFIX,
    INVENTORY_ID_PREFIX,
    SUPPLIER_ID_PREFIX,
)


def _max_suffix(values: Iterable[str], pattern: re.Pattern) -> int:
    highest = 0
    for value in values:
        match = pattern.search(value or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def next_sequential_code(prefix: str, existing_ids: Iterable[str], width: int = 3) -> str:
    pattern = re.compile(rf"{re.escape(prefix)}-(\d+)")
    return f"{prefix}-{_max_suffix(existing_ids, pattern) + 1:0{width}d}"


def next_inventory_id(existing_ids: Iterable[str]) -> str:
    return next_sequential_code(INVENTORY_ID_PREFIX, existing_ids)


def next_supplier_id(existing_ids: Iterable[str]) -> str:
    return next_sequential_code(SUPPLIER_ID_PREFIX, existing_ids)


def location_prefix(
    category: str,
    prefixes: Optional[Mapping[str, str]] = None,
) -> str:
    table = CATEGORY_LOCATION_PREFIX if prefixes is None else prefixes
    return table.get(category) or category.strip()[:1].upper()


def next_location_code(
    category: str,
    existing_items: Iterable,
    prefixes: Optional[Mapping[str, str]] = None,
) -> str:
    """Next free ``<Prefix>-NN`` for the category.

    During a bulk import ``existing_items`` must include the items already
    created in the same batch, otherwise every row gets the same code.
    """
    prefix = location_prefix(category, prefixes)
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")

    locations = (
        item.get("location", "") if isinstance(item, dict) else getattr(item, "location", "")
        for item in existing_items
    )
    return f"{prefix}-{_max_suffix(locations, pattern) + 1:02d}"
