from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns used by every entity"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes become naive UTC; naive ones are taken to be UTC already"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
