"""Cell value parsing helpers.

Cells arrive as raw strings (the host's string representation of whatever
was typed). These helpers normalize and interpret them. None of them raise
on bad input; they return None (or False) so callers can turn the failure
into a violation.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Iterable, Optional

from ...const import GUID_REGEX

_GUID_RE = re.compile(GUID_REGEX, re.IGNORECASE)

_FORMAT_HINTS = {
    "%Y": "YYYY",
    "%m": "MM",
    "%d": "DD",
    "%H": "hh",
    "%M": "mm",
    "%S": "ss",
}


def normalize_cell_value(value: Any) -> str:
    """Return the string representation stored for a cell.

    Examples:
        >>> normalize_cell_value(None)
        ''
        >>> normalize_cell_value(3)
        '3'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def is_blank(value: Optional[str]) -> bool:
    """Check if a cell value is empty or whitespace only."""
    return value is None or not value.strip()


def parse_turn(value: Optional[str]) -> Optional[int]:
    """Parse a turn number.

    Integral floats are accepted since spreadsheet hosts often hand back
    "2.0" for a cell that shows 2.

    Examples:
        >>> parse_turn(" 3 ")
        3
        >>> parse_turn("2.0")
        2
        >>> parse_turn("2.5") is None
        True
    """
    if is_blank(value):
        return None
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    number = parse_number(text)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_number(value: str) -> Optional[float]:
    """Parse a finite number, or return None."""
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_date(value: str, formats: Iterable[str]) -> Optional[datetime]:
    """Parse value with the first matching strptime format, or return None."""
    text = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def is_guid(value: str) -> bool:
    """Check for the 8-4-4-4-12 hex grouping.

    Examples:
        >>> is_guid("550e8400-e29b-41d4-a716-446655440000")
        True
        >>> is_guid("not-a-guid")
        False
    """
    return _GUID_RE.fullmatch(value.strip()) is not None


def split_items(value: str, separators: Iterable[str]) -> list[str]:
    """Split a multi-value cell into stripped, non-empty items.

    Examples:
        >>> split_items("a; b,c", (",", ";"))
        ['a', 'b', 'c']
    """
    separators = tuple(separators)
    if not separators:
        return [value.strip()] if value.strip() else []
    splitter = "|".join(re.escape(sep) for sep in separators)
    return [item.strip() for item in re.split(splitter, value) if item.strip()]


def describe_date_format(fmt: str) -> str:
    """Render a strptime layout the way users read it.

    Examples:
        >>> describe_date_format("%Y-%m-%d")
        'YYYY-MM-DD'
    """
    for directive, hint in _FORMAT_HINTS.items():
        fmt = fmt.replace(directive, hint)
    return fmt
