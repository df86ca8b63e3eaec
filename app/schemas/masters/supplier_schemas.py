from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from app.models.enums.supplier_status import SupplierStatus
from app.utils.number_utils import to_non_negative_float


class SupplierBase(BaseModel):
    name: str
    contact: str = ""
    email: str = ""
    phone: str = ""
    category: str = ""
    status: SupplierStatus = SupplierStatus.active
    country: str = ""
    city: str = ""
    address: str = ""


class SupplierCreate(SupplierBase):
    id: Optional[str] = None
    purchases: float = 0
    payments: float = 0

    @field_validator("purchases", "payments", mode="before")
    @classmethod
    def _amounts(cls, v):
        return to_non_negative_float(v)


class SupplierUpdate(BaseModel):
    name: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    category: Optional[str] = None
    status: Optional[SupplierStatus] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    purchases: Optional[float] = None
    payments: Optional[float] = None

    @field_validator("purchases", "payments", mode="before")
    @classmethod
    def _amounts(cls, v):
        return None if v is None else to_non_negative_float(v)


class SupplierOut(SupplierBase):
    id: str
    purchases: float = 0
    payments: float = 0
    balance: float = 0
    archived: bool = False
    archived_at: Optional[str] = None

    class Config:
        from_attributes = True
        use_enum_values = True


class SupplierListData(BaseModel):
    total: int
    items: List[SupplierOut]


class SupplierBulkStatusPayload(BaseModel):
    ids: List[str] = Field(min_length=1)
    status: SupplierStatus
