"""Custom exceptions for the turn validator.

Two kinds of failure are raised here:

- Configuration errors are fatal at engine construction. A column rule with an
  unknown data type or a pattern that does not compile is refused, and the
  offending column is named.
- Precondition errors mean the caller misused the engine (for example editing
  a record that is not in the loaded dataset). They are raised before any
  state is touched, so the engine stays consistent.

Validation violations are never raised. They are data, reported through the
engine's violation mapping.
"""

from __future__ import annotations


class TurnValidatorError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(TurnValidatorError, ValueError):
    """Column rules or rule files are invalid.

    Attributes:
        column: Column id the problem belongs to, when there is one

    Example:
        >>> raise ConfigurationError("unknown data type 'currency'", column="Price")
        Traceback (most recent call last):
        ...
        turn_validator.domain.exceptions.ConfigurationError: Column 'Price': unknown data type 'currency'
    """

    def __init__(self, message: str, column: str | None = None) -> None:
        self.column = column
        if column is not None:
            message = f"Column '{column}': {message}"
        super().__init__(message)


class PreconditionError(TurnValidatorError):
    """Caller error, distinct from a validation violation."""


class UnknownRecordError(PreconditionError, LookupError):
    """Record reference does not match any record in the loaded dataset."""


class AmbiguousRecordError(PreconditionError):
    """Record key is shared by several records, so it cannot pick one.

    Address the record by its row position instead.
    """


class UnknownColumnError(PreconditionError, LookupError):
    """Column id is neither ruled nor present on the record."""
