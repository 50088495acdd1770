"""
Timestamp helpers for listing records and flyer footers.

Records store timezone-aware UTC datetimes. The footer prints a long-form
date ("October 18, 2026") in US English regardless of process locale.
"""
from datetime import datetime, timezone
from typing import Optional

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def utc_now() -> datetime:
    """
    Return current UTC time with timezone info.

    Use this instead of datetime.now() or datetime.utcnow() to ensure
    timezone-aware UTC timestamps.
    """
    return datetime.now(timezone.utc)


def format_long_date(dt: datetime) -> str:
    """
    Long-style date, e.g. "October 18, 2026".

    Month names are spelled out here rather than via strftime("%B") so the
    footer does not change with the process locale.
    """
    return f"{_MONTHS[dt.month - 1]} {dt.day}, {dt.year}"


def parse_timestamp(s: Optional[str]) -> Optional[datetime]:
    """
    Parse a timestamp string to datetime, handling multiple formats.

    Handles:
    - "YYYY-MM-DD HH:MM:SS"
    - "YYYY-MM-DDTHH:MM:SS" (ISO 8601 with T)
    - "YYYY-MM-DD HH:MM:SS.ffffff" (with microseconds)
    - "YYYY-MM-DD"

    Naive results are assumed to be UTC.

    Returns:
        timezone-aware datetime or None if input is None/empty/unparseable
    """
    if not s:
        return None

    normalized = s.replace("T", " ")

    for fmt in ("%Y-%m-%d %H:%M:%S.%f", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(normalized, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    # Fallback: fromisoformat handles offsets like "+00:00"
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
