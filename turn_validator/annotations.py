"""Cell annotations for the presentation adapter.

Turns the engine's violation mapping into what a grid shows: a highlight
colour and an explanatory comment per flagged cell. Drawing them is the
host's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .const import ERROR_FILL_COLOR, WARNING_FILL_COLOR
from .domain.value_objects import CellId, Severity, Violation

_FILL_COLORS = {
    Severity.ERROR: ERROR_FILL_COLOR,
    Severity.WARNING: WARNING_FILL_COLOR,
}


@dataclass(frozen=True)
class CellAnnotation:
    """Highlight and comment for one flagged cell.

    Attributes:
        cell_id: Annotated cell
        severity: Worst severity among the cell's violations
        fill_color: Hex RGB highlight colour
        comment: One line per violation
    """

    cell_id: CellId
    severity: Severity
    fill_color: str
    comment: str


def annotate_cell(cell_id: CellId, violations: Sequence[Violation]) -> CellAnnotation:
    """Build the annotation for one cell.

    Raises:
        ValueError: If violations is empty (clean cells carry no annotation)
    """
    if not violations:
        raise ValueError(f"No violations to annotate for cell {cell_id}")

    severity = (
        Severity.ERROR
        if any(v.severity is Severity.ERROR for v in violations)
        else Severity.WARNING
    )
    return CellAnnotation(
        cell_id=cell_id,
        severity=severity,
        fill_color=_FILL_COLORS[severity],
        comment="\n".join(v.message for v in violations),
    )


def build_annotations(
    violations: Mapping[CellId, Sequence[Violation]],
) -> dict[CellId, CellAnnotation]:
    """Annotate every flagged cell in a violation mapping.

    Example:
        >>> build_annotations({})
        {}
    """
    return {
        cell_id: annotate_cell(cell_id, cell_violations)
        for cell_id, cell_violations in violations.items()
        if cell_violations
    }
