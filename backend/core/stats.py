from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from core.warranty import add_months

WARRANTY_EXPIRING_WINDOW_DAYS = 90
# Calendar months, not the 180-day threshold used by core.status.
INSPECTION_OVERDUE_WINDOW_MONTHS = 6


@dataclass(frozen=True)
class StatsWindow:
    today: date
    expiring_until: date
    inspected_before: date


def stats_window(now: datetime) -> StatsWindow:
    today = now.date()
    return StatsWindow(
        today=today,
        expiring_until=today + timedelta(days=WARRANTY_EXPIRING_WINDOW_DAYS),
        inspected_before=add_months(today, -INSPECTION_OVERDUE_WINDOW_MONTHS),
    )


def is_warranty_expiring(expiry: date, window: StatsWindow) -> bool:
    return window.today < expiry <= window.expiring_until


def is_inspection_overdue(last_inspection, window: StatsWindow) -> bool:
    return last_inspection is None or last_inspection < window.inspected_before


def compute_stats(items: Iterable, vendors: Sequence, now: datetime) -> dict:
    """KPI counts over in-memory collections of items and vendors."""
    window = stats_window(now)
    total = expiring = overdue = 0
    for item in items:
        total += 1
        if item.warranty_expiry_date is not None and is_warranty_expiring(item.warranty_expiry_date, window):
            expiring += 1
        if is_inspection_overdue(item.last_inspection_date, window):
            overdue += 1
    return {
        "total_items": total,
        "warranty_expiring": expiring,
        "inspections_overdue": overdue,
        "active_vendors": len(vendors),
    }
