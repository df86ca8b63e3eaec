# app/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DUPLICATE_ID = "DUPLICATE_ID"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- INVENTORY ----------------
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    IMPORT_FILE_INVALID = "IMPORT_FILE_INVALID"

    # ---------------- SUPPLIERS ----------------
    SUPPLIER_NOT_FOUND = "SUPPLIER_NOT_FOUND"
    SUPPLIER_CREATION_FAILED = "SUPPLIER_CREATION_FAILED"

    # ---------------- CATEGORIES ----------------
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    CATEGORY_EXISTS = "CATEGORY_EXISTS"
    SUBCATEGORY_EXISTS = "SUBCATEGORY_EXISTS"
