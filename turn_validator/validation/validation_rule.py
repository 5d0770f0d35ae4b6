"""Validation Rule abstract base class.

Abstract base class for the per-cell checks run by the field validator.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..domain.helpers import split_items
from ..domain.value_objects import ColumnRule, ViolationKind


class ValidationRule(ABC):
    """Abstract base class for cell checks.

    A check looks at one non-blank cell value and the column's rule and
    returns an explanation when the value fails, or None when it passes.
    Checks are stateless, so one instance serves every cell.
    """

    kind: ViolationKind

    def applies_to(self, column: ColumnRule) -> bool:
        """Whether this check has anything to verify for column."""
        return True

    @abstractmethod
    def validate(self, value: str, column: ColumnRule) -> Optional[str]:
        """Validate a value against this check.

        Args:
            value: Raw, non-blank cell value
            column: The column's rule

        Returns:
            Human-readable explanation if the value fails, otherwise None
        """

    @staticmethod
    def candidate_values(value: str, column: ColumnRule) -> list[str]:
        """Values a type/dropdown/pattern check looks at.

        A multi-value column is split into its items; a single-value column
        is checked as a whole.
        """
        if column.allows_multiple:
            return split_items(value, column.separators)
        return [value.strip()]

    @staticmethod
    def quote_items(items: list[str]) -> str:
        """Format failing items for a message."""
        return ", ".join(f"'{item}'" for item in items)
