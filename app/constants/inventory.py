# app/constants/inventory.py

INVENTORY_ID_PREFIX = "INV"
SUPPLIER_ID_PREFIX = "SUP"

# Category name -> warehouse location prefix.
# Unmapped categories fall back to their first letter.
CATEGORY_LOCATION_PREFIX = {
    "Electronics": "E",
    "Furniture": "F",
    "Clothing": "C",
    "Food & Beverages": "D",  # dry goods / food storage
}

UNASSIGNED_LOCATION = "UNASSIGNED"

DEFAULT_BRAND = "Unknown"
IMPORTED_SUPPLIER_CATEGORY = "Imported"

DEFAULT_CATEGORIES = {
    "Electronics": ["Phones", "Laptops", "Tablets", "Accessories", "Monitors"],
    "Furniture": ["Desks", "Chairs", "Cabinets", "Shelving"],
    "Clothing": ["Shirts", "Pants", "Shoes", "Accessories"],
    "Food & Beverages": ["Beverages", "Snacks", "Canned Goods", "Fresh Produce"],
}
