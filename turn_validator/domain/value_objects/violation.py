"""Violation value object.

A violation is one structured reason why a cell fails validation. A cell may
carry several at once (for example a pattern mismatch and a duplicate key).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .cell_id import CellId


class ViolationKind(str, Enum):
    """Kinds of violation, in the order they are reported within a cell."""

    REQUIRED = "required"
    TYPE = "type"
    ALLOWED_VALUES = "allowed-values"
    PATTERN = "pattern"
    MULTIPLICITY = "multiplicity"
    DUPLICATE_KEY = "duplicate-key"
    SEQUENCE_GAP = "sequence-gap"

    @property
    def order(self) -> int:
        """Position of this kind in the reporting order."""
        return list(ViolationKind).index(self)

    @property
    def is_cross_record(self) -> bool:
        """Whether the outcome depends on more than one record."""
        return self in (ViolationKind.DUPLICATE_KEY, ViolationKind.SEQUENCE_GAP)


class Severity(str, Enum):
    """How serious a violation is."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Violation:
    """Reason a cell fails validation.

    Attributes:
        cell_id: Cell the violation is attached to
        kind: Which check produced it
        message: Human-readable explanation, shown to the user as-is
        severity: ERROR (default) or WARNING

    Example:
        >>> v = Violation(CellId(0, "QueryID"), ViolationKind.REQUIRED, "QueryID is required")
        >>> v.kind.value
        'required'
    """

    cell_id: CellId
    kind: ViolationKind
    message: str
    severity: Severity = Severity.ERROR

    @property
    def sort_key(self) -> tuple[int, str]:
        """Stable ordering key within a cell."""
        return (self.kind.order, self.message)

    def __str__(self) -> str:
        """Return string representation of the violation."""
        return f"{self.cell_id} {self.kind.value}: {self.message}"
