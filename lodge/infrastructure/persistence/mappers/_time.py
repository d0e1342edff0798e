from datetime import UTC, datetime


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on the way out; stored values are always UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
