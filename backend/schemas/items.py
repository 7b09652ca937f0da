from datetime import date, datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.warranty import MAX_WARRANTY_MONTHS, MIN_WARRANTY_MONTHS


ConditionStatus = Literal["excellent", "good", "fair", "poor"]

ITEM_TYPE_LABELS = {
    "wooden-sleeper": "Wooden Sleeper",
    "concrete-sleeper": "Concrete Sleeper",
    "rail-liner": "Rail Liner",
    "rail-pad": "Rail Pad",
    "elastic-rail-clip": "Elastic Rail Clip",
}

MAX_BATCH_QUANTITY = 1000


def _strip_required(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("field is required")
    return v


class ItemBatchCreate(BaseModel):
    item_type: str
    vendor_name: str
    supply_date: date
    warranty_period: int = Field(ge=MIN_WARRANTY_MONTHS, le=MAX_WARRANTY_MONTHS)
    quantity: int = Field(ge=1, le=MAX_BATCH_QUANTITY)

    @field_validator("item_type", "vendor_name")
    @classmethod
    def _required(cls, v: str) -> str:
        return _strip_required(v)


class ItemUpdate(BaseModel):
    item_type: Optional[str] = None
    vendor_name: Optional[str] = None
    supply_date: Optional[date] = None
    warranty_period: Optional[int] = Field(default=None, ge=MIN_WARRANTY_MONTHS, le=MAX_WARRANTY_MONTHS)
    warranty_expiry_date: Optional[date] = None
    last_inspection_date: Optional[date] = None
    condition_status: Optional[ConditionStatus] = None
    inspection_notes: Optional[str] = None
    qr_code_url: Optional[str] = None

    @field_validator("item_type", "vendor_name")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v

    @field_validator(
        "supply_date", "warranty_expiry_date", "warranty_period", "item_type", "vendor_name", "condition_status"
    )
    @classmethod
    def _not_null(cls, v):
        # Only last_inspection_date and inspection_notes may be cleared.
        if v is None:
            raise ValueError("cannot be null")
        return v


class ItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    item_type: str
    vendor_name: str
    supply_date: date
    warranty_period: int
    warranty_expiry_date: date
    last_inspection_date: Optional[date] = None
    condition_status: ConditionStatus = "good"
    inspection_notes: Optional[str] = None
    qr_code_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ItemBatchRead(BaseModel):
    items: List[ItemRead]
    count: int
