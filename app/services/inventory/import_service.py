# app/services/inventory/import_service.py
#
# Two phases: parse_import_rows() validates loose spreadsheet rows into
# drafts (fail-partial, errors tagged with the sheet row number), then
# import_confirm() resolves suppliers and locations and creates the items
# one at a time. Creation stays sequential so that location codes and
# supplier de-duplication see everything allocated earlier in the batch.

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from app.constants.inventory import (
    DEFAULT_BRAND,
    IMPORTED_SUPPLIER_CATEGORY,
    UNASSIGNED_LOCATION,
)
from app.core.exceptions import AppException, SupplierCreationFailed
from app.models.enums.supplier_status import SupplierStatus
from app.schemas.inventory.import_schemas import ImportDraft, ImportPreview, ImportResult
from app.schemas.inventory.inventory_item_schemas import InventoryItem, InventoryItemCreate
from app.schemas.masters.supplier_schemas import SupplierCreate, SupplierOut
from app.services.inventory.code_generator import next_location_code
from app.services.inventory.inventory_item_service import (
    create_inventory_item,
    list_inventory_items,
)
from app.services.masters.supplier_service import create_supplier, list_suppliers
from app.services.storage.document_store import DocumentStore

logger = logging.getLogger(__name__)

# spreadsheet row 1 is the header
HEADER_OFFSET = 2

# Matched against lower-cased, trimmed column headers; first non-blank wins
COLUMN_SYNONYMS: Dict[str, tuple] = {
    "photo_url": ("photo", "photo url", "photourl"),
    "name": ("name",),
    "brand": ("brand",),
    "category": ("category",),
    "subcategory": ("sub category", "subcategory"),
    "quantity": ("quantity",),
    "price": ("price", "price per piece", "priceperpiece"),
    "supplier": ("supplier", "supplier id", "supplierid"),
    "location": ("location",),
    "description": ("description",),
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _number(value: Any) -> float:
    if _is_blank(value):
        return 0.0
    number = float(str(value).strip()) if isinstance(value, str) else float(value)
    if math.isnan(number) or math.isinf(number):
        raise ValueError(value)
    return number


def normalize_import_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Map an untyped row onto canonical field names through COLUMN_SYNONYMS."""
    lowered: Dict[str, Any] = {}
    for key, value in row.items():
        lowered.setdefault(str(key).strip().lower(), value)

    normalized: Dict[str, Any] = {}
    for field, synonyms in COLUMN_SYNONYMS.items():
        normalized[field] = next(
            (lowered[s] for s in synonyms if s in lowered and not _is_blank(lowered[s])),
            None,
        )
    return normalized


# =========================
# PARSE / VALIDATE
# =========================
def _row_to_draft(row: Dict[str, Any], row_number: int):
    """Return (draft, None) or (None, error message)."""
    fields = normalize_import_row(row)
    prefix = f"Row {row_number}"

    name = _text(fields["name"])
    if not name:
        return None, f"{prefix}: Name is required"

    category = _text(fields["category"])
    if not category:
        return None, f"{prefix}: Category is required"

    try:
        quantity = _number(fields["quantity"])
    except (TypeError, ValueError):
        return None, f"{prefix}: Quantity must be a number"
    if quantity < 0:
        return None, f"{prefix}: Quantity cannot be negative"

    try:
        price = _number(fields["price"])
    except (TypeError, ValueError):
        return None, f"{prefix}: Price must be a number"
    if price < 0:
        return None, f"{prefix}: Price cannot be negative"

    quantity = math.floor(quantity)

    draft = ImportDraft(
        row_number=row_number,
        name=name,
        category=category,
        subcategory=_text(fields["subcategory"]) or None,
        quantity=quantity,
        price_per_piece=price,
        brand=_text(fields["brand"]) or DEFAULT_BRAND,
        supplier=_text(fields["supplier"]),
        location=_text(fields["location"]),
        description=_text(fields["description"]) or None,
        photo_url=_text(fields["photo_url"]) or None,
        # imported stock is treated as already received
        quantity_purchased=quantity,
        quantity_sold=0,
        reorder_required=False,
    )
    return draft, None


def parse_import_rows(rows: Iterable[Dict[str, Any]]) -> ImportPreview:
    items: List[ImportDraft] = []
    errors: List[str] = []

    for index, row in enumerate(rows):
        draft, error = _row_to_draft(row, index + HEADER_OFFSET)
        if error:
            errors.append(error)
        else:
            items.append(draft)

    logger.info(
        "Import rows parsed",
        extra={"accepted": len(items), "rejected": len(errors)},
    )
    return ImportPreview(items=items, errors=errors)


# =========================
# SUPPLIER RESOLUTION
# =========================
class _SupplierResolver:
    """id match -> case-insensitive name match -> created in this batch -> auto-create."""

    def __init__(self, store: DocumentStore, suppliers: List[SupplierOut]):
        self.store = store
        self.by_id = {s.id: s for s in suppliers}
        self.by_name = {s.name.strip().lower(): s for s in suppliers}
        self.created: Dict[str, SupplierOut] = {}

    async def resolve(self, reference: str) -> str:
        reference = reference.strip()
        if not reference:
            return ""

        if reference in self.by_id:
            return self.by_id[reference].id

        key = reference.lower()
        if key in self.by_name:
            return self.by_name[key].id
        if key in self.created:
            return self.created[key].id

        try:
            supplier = await self._auto_create(reference)
        except SupplierCreationFailed as exc:
            logger.warning(exc.detail)
            return ""

        self.created[key] = supplier
        self.by_name[key] = supplier
        return supplier.id

    async def _auto_create(self, name: str) -> SupplierOut:
        try:
            supplier = await create_supplier(
                self.store,
                SupplierCreate(
                    name=name,
                    category=IMPORTED_SUPPLIER_CATEGORY,
                    status=SupplierStatus.active,
                ),
            )
        except AppException as exc:
            raise SupplierCreationFailed(name, exc.detail) from exc

        logger.info(
            "Supplier auto-created during import",
            extra={"supplier_id": supplier.id, "supplier_name": name},
        )
        return supplier


# =========================
# CONFIRM
# =========================
def _resolve_location(draft: ImportDraft, known_items: List[InventoryItem]) -> str:
    location = draft.location.strip()
    if location:
        return location
    if draft.category:
        return next_location_code(draft.category, known_items)
    return UNASSIGNED_LOCATION


async def import_confirm(
    store: DocumentStore,
    drafts: Iterable[ImportDraft],
    *,
    suppliers: Optional[List[SupplierOut]] = None,
) -> ImportResult:
    if suppliers is None:
        suppliers = (await list_suppliers(store)).items
    resolver = _SupplierResolver(store, suppliers)

    # persisted items plus everything created so far in this batch
    known_items = list((await list_inventory_items(store, include_archived=True)).items)

    created: List[InventoryItem] = []
    errors: List[str] = []

    for draft in drafts:
        location = _resolve_location(draft, known_items)
        supplier_id = await resolver.resolve(draft.supplier)

        try:
            item = await create_inventory_item(
                store,
                InventoryItemCreate(
                    name=draft.name,
                    category=draft.category,
                    subcategory=draft.subcategory,
                    quantity=draft.quantity,
                    location=location,
                    brand=draft.brand or DEFAULT_BRAND,
                    price_per_piece=draft.price_per_piece,
                    supplier_id=supplier_id,
                    quantity_purchased=draft.quantity_purchased,
                    quantity_sold=draft.quantity_sold,
                    reorder_required=draft.reorder_required,
                    photo_url=draft.photo_url,
                    description=draft.description,
                ),
            )
        except AppException as exc:
            logger.warning(
                "Import row rejected",
                extra={"row_number": draft.row_number, "reason": exc.detail},
            )
            errors.append(f"Row {draft.row_number} ({draft.name}): {exc.detail}")
            continue

        created.append(item)
        known_items.append(item)

    logger.info(
        "Import completed",
        extra={
            "created": len(created),
            "suppliers_created": len(resolver.created),
            "failed": len(errors),
        },
    )

    return ImportResult(
        created_count=len(created),
        suppliers_created=len(resolver.created),
        items=created,
        errors=errors or None,
    )
