"""Timestamp utilities for consistent timezone handling.

All internal timestamps are stored and compared in UTC.

Usage:
    from autoblog.utils.timestamps import now_utc, parse_timestamp_lenient

    dt = parse_timestamp_lenient("2025-12-17T15:20:21Z")
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional, Union


def now_utc() -> datetime:
    """Get current time in UTC with timezone info."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Union[str, int, float]) -> datetime:
    """Parse a timestamp as returned by scraping tasks.

    Handles:
    - ISO 8601: "2025-12-17T15:20:21+0000"
    - ISO 8601 with Z: "2025-12-17T15:20:21Z"
    - Date only: "2025-12-17"
    - Unix seconds (int, float or digit string)

    Naive values are assumed to be UTC.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)

    s = (value or "").strip()
    if not s:
        raise ValueError("Empty timestamp string")

    if s.isdigit():
        return datetime.fromtimestamp(int(s), tz=timezone.utc)

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    # +0000 -> +00:00
    tz_match = re.search(r"([+-])(\d{2})(\d{2})$", s)
    if tz_match:
        sign, hours, minutes = tz_match.groups()
        s = s[:-5] + f"{sign}{hours}:{minutes}"

    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        for fmt in ("%Y-%m-%d %H:%M:%S", "%Y/%m/%d", "%d/%m/%Y"):
            try:
                dt = datetime.strptime(s, fmt)
                break
            except ValueError:
                continue
        else:
            raise ValueError(f"Cannot parse timestamp: {s}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp_lenient(
    value: Union[str, int, float, None],
    default: Optional[datetime] = None,
) -> Optional[datetime]:
    """Parse timestamp, returning default on failure instead of raising."""
    if value is None:
        return default
    try:
        return parse_timestamp(value)
    except (ValueError, TypeError, OverflowError, OSError):
        return default
