# querychart/services/formatters.py
"""Value formatters applied to chart labels."""

from typing import Any, Callable, Optional

from querychart.utils.values import parse_date, to_number


_COMPACT_UNITS = (
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def _trim(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_number(value: Any) -> str:
    """Grouped number with at most two decimals: ``1,234.5``."""
    number = to_number(value)
    if number is None:
        return str(value)
    return _trim(f"{number:,.2f}")


def format_currency(value: Any) -> str:
    """USD with two decimals: ``$1,234.50``."""
    number = to_number(value)
    if number is None:
        return str(value)
    sign = "-" if number < 0 else ""
    return f"{sign}${abs(number):,.2f}"


def format_compact_number(value: Any) -> str:
    """Short K/M/B/T form: ``1.2K``, ``15M``."""
    number = to_number(value)
    if number is None:
        return str(value)

    magnitude = abs(number)
    for index, (threshold, suffix) in enumerate(_COMPACT_UNITS):
        if magnitude >= threshold:
            scaled = number / threshold
            digits = 0 if abs(scaled) >= 100 else 1
            # 999.95K rounds to 1000K; carry into the next unit
            if abs(round(scaled, digits)) >= 1000 and index > 0:
                threshold, suffix = _COMPACT_UNITS[index - 1]
                scaled, digits = number / threshold, 1
            return f"{_trim(f'{scaled:.{digits}f}')}{suffix}"
    return format_number(number)


def format_date(value: Any) -> str:
    """Long date: ``January 1, 2024``."""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_short_date(value: Any) -> str:
    """Month and day: ``Jan 1``."""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.strftime('%b')} {parsed.day}"


def format_percentage(value: Any) -> str:
    """Percent of a 0-100 value: ``45`` -> ``45%``."""
    number = to_number(value)
    if number is None:
        return str(value)
    return f"{number / 100:.0%}"


def format_string(value: Any) -> str:
    return str(value)


FORMATTERS: dict[str, Callable[[Any], str]] = {
    "currency": format_currency,
    "number": format_number,
    "compactNumber": format_compact_number,
    "date": format_date,
    "shortDate": format_short_date,
    "percentage": format_percentage,
    "string": format_string,
}


def format_value(value: Any, formatter: Optional[str] = None) -> str:
    """Format a value with a named formatter.

    Unknown or missing formatter names fall back to ``str``. ``None``
    formats as an empty string.
    """
    if value is None:
        return ""
    return FORMATTERS.get(formatter or "string", format_string)(value)
