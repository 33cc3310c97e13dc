# foodconnect/utils/dates.py

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the format stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Converts an aware datetime to naive UTC; naive values are assumed to be UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
