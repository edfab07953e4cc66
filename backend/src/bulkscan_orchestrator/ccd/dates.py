"""Date handling for CCD case data (ISO 8601, optional trailing Z)."""

from datetime import datetime
from typing import Any, Optional


def parse_ccd_datetime(value: Any) -> Optional[datetime]:
    """Parse a CCD date-time value.

    Args:
        value: datetime, ISO 8601 string or None

    Returns:
        datetime or None when value is empty

    Raises:
        ValueError: If value is a string that is not ISO 8601
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO 8601 date-time, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_ccd_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format a date-time the way CCD stores it (no timezone suffix)."""
    if value is None:
        return None
    return value.replace(tzinfo=None).isoformat(timespec="milliseconds")
