"""Domain helper functions."""

from .parsing import (
    describe_date_format,
    is_blank,
    is_guid,
    normalize_cell_value,
    parse_date,
    parse_number,
    parse_turn,
    split_items,
)

__all__ = [
    "describe_date_format",
    "is_blank",
    "is_guid",
    "normalize_cell_value",
    "parse_date",
    "parse_number",
    "parse_turn",
    "split_items",
]
