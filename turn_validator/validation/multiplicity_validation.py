"""Multiplicity Validation rule.

Validate that a single-value cell does not hold a list.
"""

from typing import Optional

from ..domain.value_objects import ColumnRule, Multiplicity, ViolationKind
from .validation_rule import ValidationRule


class MultiplicityValidation(ValidationRule):
    """Validate that a single-value column holds one value.

    YAML configuration:
        column: ExpectedTopic
        multiplicity: single
        separators: [",", ";"]   # optional; [] disables the check

    Any configured separator in the value is a violation, whatever the other
    checks say.
    """

    kind = ViolationKind.MULTIPLICITY

    def applies_to(self, column: ColumnRule) -> bool:
        """Only single-value columns with separators are checked."""
        return column.multiplicity is Multiplicity.SINGLE and bool(column.separators)

    def validate(self, value: str, column: ColumnRule) -> Optional[str]:
        """Check the value contains no list separator."""
        found = [sep for sep in column.separators if sep in value]
        if not found:
            return None
        return (
            f"Only one value is allowed in {column.column_id}; "
            f"found separator {self.quote_items(found)}"
        )
