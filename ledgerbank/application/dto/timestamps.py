"""Timestamp rendering shared by the response DTOs."""

from datetime import datetime, timezone


def isoformat_utc(value: datetime) -> str:
    """Render a timestamp as ISO 8601 UTC with a trailing Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"
