from datetime import datetime, timezone


def get_now() -> datetime:
    """Reference instant for status classification; overridden in tests."""
    return datetime.now(timezone.utc)
