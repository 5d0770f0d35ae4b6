"""Required Validation rule.

Validate that a required cell is not blank.
"""

from typing import Optional

from ..domain.helpers import is_blank
from ..domain.value_objects import ColumnRule, ViolationKind
from .validation_rule import ValidationRule


class RequiredValidation(ValidationRule):
    """Validate that a required cell has a value.

    YAML configuration:
        column: QueryID
        required: true

    Unlike the other checks this one also sees empty values. When it fails,
    the field validator runs no other check on the cell.

    A multi-value cell holding only separators (", ;") has no items and
    counts as empty.
    """

    kind = ViolationKind.REQUIRED

    def applies_to(self, column: ColumnRule) -> bool:
        """Only required columns are checked."""
        return column.required

    def validate(self, value: str, column: ColumnRule) -> Optional[str]:
        """Check the value is not empty."""
        if self.is_empty(value, column):
            return f"{column.column_id} is required"
        return None

    @classmethod
    def is_empty(cls, value: Optional[str], column: ColumnRule) -> bool:
        """Check if a cell holds no value for column."""
        if is_blank(value):
            return True
        return not cls.candidate_values(value, column)
