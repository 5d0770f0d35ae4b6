"""Field Validator.

Evaluates one cell's value against its column's rule, independently of every
other row.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..domain.value_objects import CellId, ColumnRule, Violation
from .enum_validation import EnumValidation
from .multiplicity_validation import MultiplicityValidation
from .pattern_validation import PatternValidation
from .required_validation import RequiredValidation
from .type_validation import TypeValidation
from .validation_rule import ValidationRule

_LOGGER = logging.getLogger(__name__)


class FieldValidator:
    """Runs the per-cell checks for one column rule.

    Order of evaluation:
    - Blank value, or a multi-value cell with no items: only the required
      check runs. A blank required cell gets
      exactly one `required` violation; a blank optional cell is clean.
    - Non-blank value: every applicable check runs and each failure yields
      its own violation, so a cell can carry several reasons at once.

    The validator holds no per-cell state; calls for different cells are
    independent.

    Example:
        >>> rule = ColumnRule("Turn", required=True, data_type="number")
        >>> found = FieldValidator().validate_cell("", rule, CellId(0, "Turn"))
        >>> [v.message for v in found]
        ['Turn is required']
    """

    # Checks run on non-blank values, in reporting order
    RULE_TYPES: tuple[type[ValidationRule], ...] = (
        TypeValidation,
        EnumValidation,
        PatternValidation,
        MultiplicityValidation,
    )

    def __init__(self) -> None:
        """Initialize field validator."""
        self._required = RequiredValidation()
        self._checks = [rule_class() for rule_class in self.RULE_TYPES]

    def validate_cell(
        self, value: Optional[str], rule: ColumnRule, cell_id: CellId
    ) -> frozenset[Violation]:
        """Validate one cell value.

        Args:
            value: Raw cell value (None is treated as blank)
            rule: The column's rule
            cell_id: Cell the resulting violations are attached to

        Returns:
            Set of violations, empty when the value is valid
        """
        value = value or ""

        if self._required.is_empty(value, rule):
            if self._required.applies_to(rule):
                message = self._required.validate(value, rule)
                if message is not None:
                    return frozenset({Violation(cell_id, self._required.kind, message)})
            return frozenset()

        violations = set()
        for check in self._checks:
            if not check.applies_to(rule):
                continue
            try:
                message = check.validate(value, rule)
            except Exception as err:
                _LOGGER.exception(
                    "Error executing %s check for cell %s: %s",
                    check.kind.value,
                    cell_id,
                    err,
                )
                message = f"Validation error: {err}"
            if message is not None:
                violations.add(Violation(cell_id, check.kind, message))

        return frozenset(violations)


_DEFAULT_VALIDATOR = FieldValidator()


def validate_cell(value: Optional[str], rule: ColumnRule, cell_id: CellId) -> frozenset[Violation]:
    """Validate one cell with the shared default FieldValidator."""
    return _DEFAULT_VALIDATOR.validate_cell(value, rule, cell_id)
