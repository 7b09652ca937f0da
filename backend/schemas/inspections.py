from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from schemas.items import ConditionStatus


class InspectionCreate(BaseModel):
    item_id: UUID
    inspection_date: date
    inspector_name: Optional[str] = None
    condition: ConditionStatus
    notes: Optional[str] = None

    @field_validator("inspector_name", "notes")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class InspectionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    item_id: UUID
    inspection_date: date
    inspector_name: Optional[str] = None
    condition: ConditionStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
