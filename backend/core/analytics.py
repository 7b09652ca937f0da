from collections import Counter
from typing import Iterable, List

from schemas.items import ITEM_TYPE_LABELS

TOP_VENDORS = 10


def type_distribution(items: Iterable) -> List[dict]:
    """Share of each item type, in order of first appearance."""
    counts = Counter(item.item_type for item in items)
    total = sum(counts.values())
    return [
        {
            "item_type": item_type,
            "label": ITEM_TYPE_LABELS.get(item_type, item_type),
            "count": count,
            "percentage": round(count / total * 100) if total else 0,
        }
        for item_type, count in counts.items()
    ]


def vendor_performance(items: Iterable, limit: int = TOP_VENDORS) -> List[dict]:
    counts = Counter(item.vendor_name for item in items)
    return [
        {"vendor": vendor, "item_count": count}
        for vendor, count in counts.most_common(limit)
    ]
