# app/routers/__init__.py

from .inventory.inventory_item_router import router as inventory_router
from .inventory.import_router import router as import_router
from .inventory.category_router import router as category_router

from .masters.supplier_router import router as supplier_router


__all__ = [
"inventory_router",
"import_router",
"category_router",

"supplier_router",
]
