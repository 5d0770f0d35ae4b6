"""ColumnRule value object.

Declarative description of the constraints on one column. Rules are loaded
once when the engine is built and never change afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from ...const import DEFAULT_DATE_FORMATS, DEFAULT_LIST_SEPARATORS
from ..exceptions import ConfigurationError


class DataType(str, Enum):
    """Value types a column can declare."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    GUID = "guid"


class Multiplicity(str, Enum):
    """Whether a cell holds one value or a separated list of values."""

    SINGLE = "single"
    MULTIPLE = "multiple"


def _coerce_enum(enum_cls, value: Any, what: str, column: str):
    """Return value as a member of enum_cls or raise ConfigurationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as err:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(
            f"unknown {what} {value!r} (expected one of: {choices})", column=column
        ) from err


@dataclass(frozen=True)
class ColumnRule:
    """Immutable per-column constraint set.

    Attributes:
        column_id: Column identifier (header name)
        required: Blank values are violations
        data_type: Expected value type
        allowed_values: Dropdown values; None means any value is allowed
        pattern: Regular expression the whole value must match
        multiplicity: SINGLE or MULTIPLE values per cell
        separators: List separators; in a SINGLE column any of them is a violation
        date_formats: strptime layouts accepted for DATE columns
        description: Free text for documentation

    Strings are accepted for data_type, multiplicity and pattern and are
    converted on construction.

    Example:
        >>> rule = ColumnRule("Turn", required=True, data_type="number")
        >>> rule.data_type
        <DataType.NUMBER: 'number'>

    Raises:
        ConfigurationError: If the data type or multiplicity is unknown, the
            pattern does not compile or the dropdown is empty
    """

    column_id: str
    required: bool = False
    data_type: DataType = DataType.TEXT
    allowed_values: Optional[tuple[str, ...]] = None
    pattern: Optional[re.Pattern] = None
    multiplicity: Multiplicity = Multiplicity.SINGLE
    separators: tuple[str, ...] = DEFAULT_LIST_SEPARATORS
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS
    description: str = ""

    def __post_init__(self) -> None:
        """Normalize and validate the rule."""
        if not isinstance(self.column_id, str) or not self.column_id.strip():
            raise ConfigurationError(
                f"column id must be a non-empty string, got {self.column_id!r}"
            )
        column = self.column_id

        object.__setattr__(
            self, "data_type", _coerce_enum(DataType, self.data_type, "data type", column)
        )
        object.__setattr__(
            self,
            "multiplicity",
            _coerce_enum(Multiplicity, self.multiplicity, "multiplicity", column),
        )

        if isinstance(self.pattern, str):
            try:
                compiled = re.compile(self.pattern)
            except re.error as err:
                raise ConfigurationError(
                    f"invalid pattern {self.pattern!r}: {err}", column=column
                ) from err
            object.__setattr__(self, "pattern", compiled)
        elif self.pattern is not None and not isinstance(self.pattern, re.Pattern):
            raise ConfigurationError(
                f"pattern must be a string, got {type(self.pattern).__name__}",
                column=column,
            )

        if self.allowed_values is not None:
            if isinstance(self.allowed_values, str):
                raise ConfigurationError(
                    "allowed values must be a list of values, not a string",
                    column=column,
                )
            allowed = tuple(str(value) for value in self.allowed_values)
            if isinstance(self.allowed_values, (set, frozenset)):
                # Sets have no order; sort them
                allowed = tuple(sorted(allowed))
            if not allowed:
                raise ConfigurationError("allowed values must not be empty", column=column)
            object.__setattr__(self, "allowed_values", allowed)

        separators = tuple(self.separators)
        if any(not isinstance(sep, str) or not sep for sep in separators):
            raise ConfigurationError(
                "separators must be non-empty strings", column=column
            )
        object.__setattr__(self, "separators", separators)

        formats = tuple(self.date_formats)
        if not formats:
            raise ConfigurationError("date formats must not be empty", column=column)
        object.__setattr__(self, "date_formats", formats)

    @property
    def allows_multiple(self) -> bool:
        """Whether the cell holds a separated list of values."""
        return self.multiplicity is Multiplicity.MULTIPLE

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ColumnRule:
        """Create a ColumnRule from a rule file entry.

        Args:
            config: Mapping with a 'column' key and optional 'required',
                'type', 'allowed', 'pattern', 'multiplicity', 'separators',
                'date_formats' and 'description' keys

        Returns:
            ColumnRule instance

        Example:
            >>> rule = ColumnRule.from_config(
            ...     {"column": "Status", "allowed": ["Open", "Closed"]}
            ... )
            >>> rule.allowed_values
            ('Open', 'Closed')
        """
        column = config.get("column")
        if not column:
            raise ConfigurationError("column rule is missing the 'column' field")

        kwargs: dict[str, Any] = {
            "column_id": column,
            "required": bool(config.get("required", False)),
            "data_type": config.get("type", DataType.TEXT),
            "allowed_values": config.get("allowed"),
            "pattern": config.get("pattern"),
            "multiplicity": config.get("multiplicity", Multiplicity.SINGLE),
            "description": config.get("description") or "",
        }
        if config.get("separators") is not None:
            kwargs["separators"] = tuple(config["separators"])
        if config.get("date_formats") is not None:
            kwargs["date_formats"] = tuple(config["date_formats"])
        return cls(**kwargs)
