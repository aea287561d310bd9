# pkidecl/utils/datetime.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pkidecl.utils.formatting import error

OutputFormat = Literal["rfc3339", "compact"]


def ensure_utc(dt: datetime) -> datetime:
    """
    Return a timezone-aware datetime in UTC.
    If `dt` is naive, treat it as UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def format_datetime(date: datetime, output_format: OutputFormat = "rfc3339") -> str:
    """
    Format a datetime in UTC using one of the canonical styles.

    Args:
        date: The datetime to format (naive treated as UTC).
        output_format: One of:
            - "rfc3339" → '%Y-%m-%dT%H:%M:%SZ' (as written in source documents)
            - "compact" → '%H:%M %d %b %Y'

    Returns:
        The formatted datetime string.
    """
    dt = ensure_utc(date)

    if output_format == "rfc3339":
        fmt = "%Y-%m-%dT%H:%M:%SZ"
    elif output_format == "compact":
        fmt = "%H:%M %d %b %Y"
    else:
        error(f"Invalid date format: {output_format!r}", 1)  # exits

    return dt.strftime(fmt)

def now_utc() -> datetime:
    """Return current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
