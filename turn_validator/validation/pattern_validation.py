"""Pattern Validation rule.

Validate that value matches the column's regular expression.
"""

from typing import Optional

from ..domain.value_objects import ColumnRule, ViolationKind
from .validation_rule import ValidationRule


class PatternValidation(ValidationRule):
    """Validate value against a regex.

    YAML configuration:
        column: QueryID
        pattern: "Q[0-9]+"

    The whole value must match (re.fullmatch).
    """

    kind = ViolationKind.PATTERN

    def applies_to(self, column: ColumnRule) -> bool:
        """Only columns with a pattern are checked."""
        return column.pattern is not None

    def validate(self, value: str, column: ColumnRule) -> Optional[str]:
        """Check every candidate value matches the pattern."""
        failing = [
            item
            for item in self.candidate_values(value, column)
            if column.pattern.fullmatch(item) is None
        ]
        if not failing:
            return None

        if column.allows_multiple:
            return (
                f"Items {self.quote_items(failing)} do not match "
                f"the pattern {column.pattern.pattern}"
            )
        return f"'{failing[0]}' does not match the pattern {column.pattern.pattern}"
