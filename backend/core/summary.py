"""Template-based item summary, used when the AI summary service is unavailable."""

from datetime import datetime

from core.status import as_instant
from schemas.summary import SummaryRequest, SummaryResponse

LOCAL_SOURCE = "local_analysis"

_CONDITION_SENTENCES = {
    "excellent": "The current condition is excellent. ",
    "good": "The current condition is good. ",
    "fair": "The condition is fair, consider monitoring. ",
    "poor": "The condition is poor, immediate attention required. ",
}


def _whole_days(start, now: datetime) -> int:
    return (now - as_instant(start, now)).days


def generate_local_summary(request: SummaryRequest, now: datetime) -> SummaryResponse:
    supply_age = _whole_days(request.supply_date, now) // 30
    warranty_remaining = request.warranty_period - supply_age
    item_type = request.item_type.replace("-", " ", 1)

    summary = f"Item Analysis Report for {request.item_id}:\n\n"
    summary += (
        f"This {item_type} was supplied by {request.vendor} "
        f"approximately {supply_age} months ago. "
    )
    if warranty_remaining > 0:
        summary += f"The item is currently under warranty with {warranty_remaining} months remaining. "
    else:
        summary += f"The warranty period has expired {abs(warranty_remaining)} months ago. "

    if request.condition:
        summary += _CONDITION_SENTENCES[request.condition]

    if request.last_inspection is not None:
        age = _whole_days(request.last_inspection, now)
        if age < 30:
            summary += f"Recent inspection ({age} days ago) indicates proactive maintenance. "
        elif age < 90:
            summary += f"Last inspection was {age} days ago, within acceptable intervals. "
        else:
            summary += f"Last inspection was {age} days ago, schedule new inspection soon. "
    else:
        summary += "No inspection record found. "

    return SummaryResponse(
        summary=summary,
        source=LOCAL_SOURCE,
        generated_at=now.isoformat(),
    )
