import calendar
from datetime import date

MIN_WARRANTY_MONTHS = 12
MAX_WARRANTY_MONTHS = 48


def add_months(d: date, months: int) -> date:
    """Shift a date by whole calendar months.

    When the target month is shorter than d.day the day is clamped to the
    month's last day, so Jan 31 + 1 month is Feb 28 (or 29).
    """
    total = d.year * 12 + (d.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def compute_expiry(supply_date: date, warranty_period: int) -> date:
    """Warranty expiry is the supply date plus the warranty period in months."""
    return add_months(supply_date, warranty_period)
