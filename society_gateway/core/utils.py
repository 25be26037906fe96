"""
Society Gateway — Shared utilities.

Pure functions used across the whole gateway. No imports from other
society_gateway modules; only the standard library is allowed.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional, Union

Number = Union[int, float]


# ---------------------------------------------------------------------------
# Presence / coercion
# ---------------------------------------------------------------------------

def is_blank(value: Any) -> bool:
    """True for ``None``, empty/whitespace strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def parse_number(value: Any) -> Optional[Number]:
    """Parse ``value`` into an int or float.

    Integral values come back as ``int`` (``"12000"`` → ``12000``,
    ``"1e3"`` → ``1000``) so they serialise without a trailing ``.0``.
    Returns ``None`` for booleans, blanks, NaN/inf and anything that is not
    a number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


# ---------------------------------------------------------------------------
# Backend document helpers
# ---------------------------------------------------------------------------

def stringify_id(value: Any) -> str:
    """Render a backend identifier as a string.

    Extended-JSON ObjectIds (``{"$oid": "..."}``) collapse to their hex value.
    """
    if value is None:
        return ""
    if isinstance(value, dict):
        if "$oid" in value:
            return str(value["$oid"])
        return ""
    return str(value)


def format_iso_date(value: Any) -> Optional[str]:
    """Return the UTC calendar date (``YYYY-MM-DD``) of a backend timestamp.

    Accepts ISO-8601 strings, epoch milliseconds and extended-JSON
    ``{"$date": ...}`` wrappers.  Returns ``None`` when the value is missing
    or cannot be parsed.
    """
    if isinstance(value, dict):
        inner = value.get("$date")
        if isinstance(inner, dict):
            inner = inner.get("$numberLong")
            if isinstance(inner, str):
                inner = parse_number(inner)
        return format_iso_date(inner)

    if isinstance(value, bool) or is_blank(value):
        return None

    if isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return dt.date().isoformat()

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return dt.date().isoformat()

    return None
