from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class StatsRead(BaseModel):
    total_items: int
    warranty_expiring: int
    inspections_overdue: int
    active_vendors: int


class AnomalyRead(BaseModel):
    id: str
    type: str
    title: str
    description: str
    item_id: Optional[UUID] = None
    severity: str
    detected_at: datetime


class TypeDistributionRead(BaseModel):
    item_type: str
    label: str
    count: int
    percentage: int


class VendorPerformanceRead(BaseModel):
    vendor: str
    item_count: int


class QRCodeRead(BaseModel):
    qr_code: str
    data: dict
