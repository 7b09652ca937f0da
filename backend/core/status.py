"""
Status classification for items, relative to a reference instant.

Calendar dates (supply, expiry, inspection) are read as midnight in the
reference instant's timezone. Day counts are the ceiling of the elapsed time in
24-hour units, so a partial day counts as a whole one.
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Literal, Optional, Union

WarrantyStatus = Literal["expired", "expiring-soon", "valid"]
InspectionStatus = Literal["never", "overdue", "due-soon", "current"]
Severity = Literal["high", "medium", "low"]

EXPIRING_SOON_DAYS = 90
INSPECTION_OVERDUE_DAYS = 180
INSPECTION_DUE_SOON_DAYS = 90

_DAY = timedelta(days=1)

DateLike = Union[date, datetime]


def as_instant(value: DateLike, now: datetime) -> datetime:
    """Coerce a date or datetime to an instant comparable with ``now``."""
    if isinstance(value, datetime):
        if value.tzinfo is None and now.tzinfo is not None:
            return value.replace(tzinfo=now.tzinfo)
        return value
    return datetime.combine(value, time.min, tzinfo=now.tzinfo)


def days_until(target: DateLike, now: datetime) -> int:
    return math.ceil((as_instant(target, now) - now) / _DAY)


def days_since(past: DateLike, now: datetime) -> int:
    return math.ceil((now - as_instant(past, now)) / _DAY)


def warranty_status(expiry: DateLike, now: datetime) -> WarrantyStatus:
    if as_instant(expiry, now) < now:
        return "expired"
    if days_until(expiry, now) <= EXPIRING_SOON_DAYS:
        return "expiring-soon"
    return "valid"


def inspection_status(last_inspection: Optional[DateLike], now: datetime) -> InspectionStatus:
    if last_inspection is None:
        return "never"
    days = days_since(last_inspection, now)
    if days > INSPECTION_OVERDUE_DAYS:
        return "overdue"
    if days > INSPECTION_DUE_SOON_DAYS:
        return "due-soon"
    return "current"


def severity_for_days_until_expiry(days: int) -> Severity:
    # Anomaly ranking only; not the same thresholds as warranty_status.
    if days <= 30:
        return "high"
    if days <= 60:
        return "medium"
    return "low"
