"""Real-time validation of tabular test-case datasets.

The package validates rows keyed by (QueryID, Turn) as they are edited:

- Field checks per cell: required, data type, dropdown, pattern, single vs
  multiple values
- Cross-record checks: duplicate keys and turn sequence gaps
- A global ON/OFF toggle; turning validation on reconciles the whole
  dataset, turning it off clears every flag

Architecture:
- domain: value objects, the Record entity and the record index
- validation: one class per check, the field and cross-record validators
- infrastructure: the ON/OFF state machine
- engine: ValidationEngine, the orchestrator the host drives
- config_loader: YAML rule files, checked with voluptuous
"""

from .annotations import CellAnnotation, build_annotations
from .config_loader import RuleConfig, load_config, load_default_rules, load_rules
from .domain.entities import Record
from .domain.exceptions import (
    AmbiguousRecordError,
    ConfigurationError,
    PreconditionError,
    TurnValidatorError,
    UnknownColumnError,
    UnknownRecordError,
)
from .domain.value_objects import (
    CellId,
    ColumnRule,
    DataType,
    IdentityColumns,
    Multiplicity,
    RecordKey,
    SequencePolicy,
    Severity,
    Violation,
    ViolationKind,
)
from .engine import ValidationEngine
from .infrastructure.state_machines import ValidationState

__version__ = "1.0.0"

__all__ = [
    "AmbiguousRecordError",
    "CellAnnotation",
    "CellId",
    "ColumnRule",
    "ConfigurationError",
    "DataType",
    "IdentityColumns",
    "Multiplicity",
    "PreconditionError",
    "Record",
    "RecordKey",
    "RuleConfig",
    "SequencePolicy",
    "Severity",
    "TurnValidatorError",
    "UnknownColumnError",
    "UnknownRecordError",
    "ValidationEngine",
    "ValidationState",
    "Violation",
    "ViolationKind",
    "build_annotations",
    "load_config",
    "load_default_rules",
    "load_rules",
]
