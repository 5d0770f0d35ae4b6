"""SequencePolicy value object.

Turn numbering convention for the cross-record sequence check: which number
the first turn of a query carries, and whether a gap is an error or only a
warning.
"""

from dataclasses import dataclass

from ...const import DEFAULT_TURN_BASE
from ..exceptions import ConfigurationError
from .violation import Severity


@dataclass(frozen=True)
class SequencePolicy:
    """Turn sequence policy.

    Attributes:
        base: First turn number of every query
        severity: Severity of sequence-gap violations

    Example:
        >>> policy = SequencePolicy(base=0, severity="warning")
        >>> policy.severity
        <Severity.WARNING: 'warning'>
    """

    base: int = DEFAULT_TURN_BASE
    severity: Severity = Severity.ERROR

    def __post_init__(self) -> None:
        """Validate and normalize the policy."""
        if not isinstance(self.base, int) or isinstance(self.base, bool):
            raise ConfigurationError(
                f"turn base must be an integer, got {self.base!r}"
            )
        try:
            object.__setattr__(self, "severity", Severity(self.severity))
        except ValueError as err:
            raise ConfigurationError(
                f"unknown sequence severity {self.severity!r}"
            ) from err

    @property
    def strict(self) -> bool:
        """Whether gaps are reported as errors."""
        return self.severity is Severity.ERROR
