"""UTC datetime helpers"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_timestamp(value: datetime | None) -> str | None:
    """ISO-8601 string for a timestamp, or None"""
    if value is None:
        return None
    return ensure_utc(value).isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into a UTC datetime.

    Accepts the trailing ``Z`` form written by JavaScript clients.

    Raises:
        ValueError: If the value is not a valid ISO-8601 string
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected ISO-8601 string, got {type(value).__name__}")
    return ensure_utc(datetime.fromisoformat(value))
