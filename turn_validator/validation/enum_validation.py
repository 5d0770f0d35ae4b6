"""Enum Validation rule.

Validate that value is in the column's dropdown list.
"""

from typing import Optional

from ..domain.value_objects import ColumnRule, ViolationKind
from .validation_rule import ValidationRule


class EnumValidation(ValidationRule):
    """Validate that value is in an allowed set of values.

    YAML configuration:
        column: ExpectedTopic
        allowed: [Greeting, Billing, Escalate]

    Matching is exact and case-sensitive.
    """

    kind = ViolationKind.ALLOWED_VALUES

    def applies_to(self, column: ColumnRule) -> bool:
        """Only dropdown columns are checked."""
        return column.allowed_values is not None

    def validate(self, value: str, column: ColumnRule) -> Optional[str]:
        """Check if every candidate value is in the allowed set."""
        allowed = column.allowed_values or ()
        failing = [
            item for item in self.candidate_values(value, column) if item not in allowed
        ]
        if not failing:
            return None

        choices = ", ".join(allowed)
        if column.allows_multiple:
            return f"Items {self.quote_items(failing)} are not allowed values ({choices})"
        return f"'{failing[0]}' is not one of the allowed values: {choices}"
