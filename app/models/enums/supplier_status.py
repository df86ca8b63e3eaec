import enum


class SupplierStatus(str, enum.Enum):
    active = "Active"
    inactive = "Inactive"
