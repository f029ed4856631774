# querychart/utils/values.py
"""Helpers for classifying raw result-set values."""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Optional


def is_number(value: Any) -> bool:
    """Check if a value is numeric (booleans excluded)."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def to_number(value: Any) -> Optional[float | int]:
    """Coerce a value to a number.

    Ints are kept as ints; Decimals and numeric strings become floats.

    Returns:
        The number, or None if the value is not numeric.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a value into a timezone-aware datetime.

    Accepts date/datetime objects and dash-separated ISO-8601 strings.
    Naive values are taken as UTC so that mixed columns stay comparable.

    Returns:
        The parsed datetime, or None if the value is not a date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text or not text[0].isdigit() or "-" not in text[:10]:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def distinct_key(value: Any) -> Any:
    """Build a hashable key that keeps booleans apart from 0/1."""
    try:
        hash(value)
    except TypeError:
        return ("unhashable", repr(value))
    return (isinstance(value, bool), value)
