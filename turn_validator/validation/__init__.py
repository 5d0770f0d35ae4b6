"""Validation framework for dataset cells and records.

This package provides:
- Field checks (required, type, dropdown, pattern, multiplicity), one class
  per check, all deriving from ValidationRule
- FieldValidator: runs the field checks for one cell
- CrossRecordValidator: duplicate-key and turn-sequence checks over the
  whole dataset

Checks never raise on bad data; they return violations.
"""

from .cross_record_validation import CrossRecordValidator
from .enum_validation import EnumValidation
from .field_validator import FieldValidator, validate_cell
from .multiplicity_validation import MultiplicityValidation
from .pattern_validation import PatternValidation
from .required_validation import RequiredValidation
from .type_validation import TypeValidation
from .validation_rule import ValidationRule

__all__ = [
    "CrossRecordValidator",
    "EnumValidation",
    "FieldValidator",
    "MultiplicityValidation",
    "PatternValidation",
    "RequiredValidation",
    "TypeValidation",
    "ValidationRule",
    "validate_cell",
]
