"""Value Objects for the turn validator domain.

Value Objects are immutable domain primitives that:
- Have no identity (equality based on value, not reference)
- Are immutable (cannot be changed after creation)
- Validate their invariants at construction
"""

from .cell_id import CellId, RecordKey
from .column_rule import ColumnRule, DataType, Multiplicity
from .identity_columns import IdentityColumns
from .sequence_policy import SequencePolicy
from .violation import Severity, Violation, ViolationKind

__all__ = [
    "CellId",
    "RecordKey",
    "ColumnRule",
    "DataType",
    "Multiplicity",
    "IdentityColumns",
    "SequencePolicy",
    "Severity",
    "Violation",
    "ViolationKind",
]
