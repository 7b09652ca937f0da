from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from schemas.items import ConditionStatus


class SummaryRequest(BaseModel):
    """Body of the summary call; camelCase on the wire, as the AI service expects."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item_id: str
    item_type: str
    vendor: str
    supply_date: date
    warranty_period: int = Field(ge=0)
    last_inspection: Optional[date] = None
    condition: Optional[ConditionStatus] = None

    @field_validator("item_id", "item_type", "vendor")
    @classmethod
    def _required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class SummaryResponse(BaseModel):
    summary: str
    source: Optional[str] = None
    generated_at: Optional[str] = None
