"""
Heuristic anomaly feed.

Flags items whose warranty is about to run out, items that were never
inspected or are overdue, and vendors supplying an unusual number of items.
Each record gets a detection time a little before ``now``; the offset is
derived from the record id so the same inventory always yields the same feed.
"""

import hashlib
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Literal, Optional
from uuid import UUID

from core.status import (
    EXPIRING_SOON_DAYS,
    INSPECTION_OVERDUE_DAYS,
    Severity,
    days_since,
    days_until,
    severity_for_days_until_expiry,
)

AnomalyType = Literal["warranty-expiring", "inspection-overdue", "supply-pattern"]

MAX_ANOMALIES = 10
INSPECTION_CRITICAL_DAYS = 365
SUPPLY_PATTERN_MIN_ITEMS = 5

SEVERITY_RANK = {"high": 3, "medium": 2, "low": 1}

# Upper bound of the detection offset per kind of record.
_WARRANTY_WINDOW = timedelta(hours=24)
_NEVER_INSPECTED_WINDOW = timedelta(days=7)
_OVERDUE_WINDOW = timedelta(days=3)
_SUPPLY_WINDOW = timedelta(days=2)


@dataclass
class Anomaly:
    id: str
    type: AnomalyType
    title: str
    description: str
    severity: Severity
    detected_at: datetime
    item_id: Optional[UUID] = None


def detection_offset(anomaly_id: str, window: timedelta) -> timedelta:
    """Stable offset in [0, window) taken from a hash of the anomaly id."""
    digest = hashlib.sha256(anomaly_id.encode("utf-8")).digest()
    span = int(window.total_seconds())
    return timedelta(seconds=int.from_bytes(digest[:8], "big") % span)


def _detected(anomaly_id: str, now: datetime, window: timedelta) -> datetime:
    return now - detection_offset(anomaly_id, window)


def item_anomalies(item, now: datetime) -> List[Anomaly]:
    out: List[Anomaly] = []

    if item.warranty_expiry_date is not None:
        days = days_until(item.warranty_expiry_date, now)
        if 0 < days <= EXPIRING_SOON_DAYS:
            aid = f"warranty-{item.id}"
            out.append(Anomaly(
                id=aid,
                type="warranty-expiring",
                title="Warranty Expiring Soon",
                description=f"Item {item.id} warranty expires in {days} days",
                item_id=item.id,
                severity=severity_for_days_until_expiry(days),
                detected_at=_detected(aid, now, _WARRANTY_WINDOW),
            ))

    if item.last_inspection_date is None:
        aid = f"inspection-never-{item.id}"
        out.append(Anomaly(
            id=aid,
            type="inspection-overdue",
            title="Inspection Required",
            description=f"Item {item.id} has never been inspected",
            item_id=item.id,
            severity="high",
            detected_at=_detected(aid, now, _NEVER_INSPECTED_WINDOW),
        ))
    else:
        days = days_since(item.last_inspection_date, now)
        if days > INSPECTION_OVERDUE_DAYS:
            aid = f"inspection-overdue-{item.id}"
            out.append(Anomaly(
                id=aid,
                type="inspection-overdue",
                title="Inspection Overdue",
                description=f"Item {item.id} is {days} days overdue for inspection",
                item_id=item.id,
                severity="high" if days > INSPECTION_CRITICAL_DAYS else "medium",
                detected_at=_detected(aid, now, _OVERDUE_WINDOW),
            ))
    return out


def supply_pattern_anomalies(items: Iterable, now: datetime) -> List[Anomaly]:
    counts = Counter(item.vendor_name for item in items)
    out: List[Anomaly] = []
    for vendor, count in counts.items():
        if count < SUPPLY_PATTERN_MIN_ITEMS:
            continue
        aid = f"supply-pattern-{vendor}"
        out.append(Anomaly(
            id=aid,
            type="supply-pattern",
            title="Supply Pattern Detected",
            description=f"Vendor {vendor} showing increased supply frequency ({count} items)",
            severity="low",
            detected_at=_detected(aid, now, _SUPPLY_WINDOW),
        ))
    return out


def rank_anomalies(anomalies: Iterable[Anomaly], limit: int = MAX_ANOMALIES) -> List[Anomaly]:
    """Most severe first, newest first within a severity, truncated to ``limit``."""
    ordered = sorted(
        anomalies,
        key=lambda a: (SEVERITY_RANK[a.severity], a.detected_at),
        reverse=True,
    )
    return ordered[:limit]


def detect_anomalies(items: Iterable, now: datetime, limit: int = MAX_ANOMALIES) -> List[Anomaly]:
    items = list(items)
    detected: List[Anomaly] = []
    for item in items:
        detected.extend(item_anomalies(item, now))
    detected.extend(supply_pattern_anomalies(items, now))
    return rank_anomalies(detected, limit)
