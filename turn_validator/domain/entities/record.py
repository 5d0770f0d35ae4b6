"""Record entity.

A Record is one row of the dataset: a mapping of column id to the cell's raw
string value. Unlike the value objects it is mutable, because the host edits
cells one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..helpers.parsing import is_blank, normalize_cell_value, parse_turn
from ..value_objects import IdentityColumns, RecordKey


@dataclass
class Record:
    """Domain entity representing one dataset row.

    Attributes:
        values: Column id -> raw cell value

    Example:
        >>> record = Record.from_mapping({"QueryID": "Q1", "Turn": 1})
        >>> record.get("Turn")
        '1'
        >>> record.key(IdentityColumns())
        RecordKey(query_id='Q1', turn=1)
    """

    values: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize every value to its string form."""
        self.values = {
            str(column): normalize_cell_value(value) for column, value in self.values.items()
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Record:
        """Create a record from any mapping of column id to value."""
        return cls(values=dict(data))

    def get(self, column_id: str) -> str:
        """Return the cell value, empty string when the column is absent."""
        return self.values.get(column_id, "")

    def set(self, column_id: str, value: Any) -> None:
        """Replace one cell value."""
        self.values[column_id] = normalize_cell_value(value)

    def has_column(self, column_id: str) -> bool:
        """Check if the record carries a value for column_id."""
        return column_id in self.values

    def key(self, identity: IdentityColumns) -> Optional[RecordKey]:
        """Derive the record's identity key.

        Args:
            identity: Which columns hold the query id and the turn

        Returns:
            RecordKey, or None when the query id is blank or the turn does
            not parse as an integer
        """
        query_id = self.get(identity.query_id)
        turn = parse_turn(self.get(identity.turn))
        if is_blank(query_id) or turn is None:
            return None
        return RecordKey(query_id.strip(), turn)

    def copy(self) -> Record:
        """Return an independent copy."""
        return Record(values=dict(self.values))
