"""CellId and RecordKey value objects.

A cell is addressed by its record's row position and its column id. Row
positions are stable for the lifetime of a loaded snapshot, so a cell keeps
its id even when the record's identity columns are edited.

A RecordKey is the record's identity, (query id, turn), derived from the
identity columns. It should be unique across a valid dataset but duplicates
are tolerated in storage and flagged by the cross-record check.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class CellId:
    """Immutable address of one cell.

    Attributes:
        row: 0-based record position in the loaded snapshot
        column_id: Column identifier (header name)

    Example:
        >>> cell = CellId(0, "Turn")
        >>> str(cell)
        'Turn[0]'
    """

    row: int
    column_id: str

    def __post_init__(self) -> None:
        """Validate field types.

        Raises:
            TypeError: If row is not an int or column_id is not a str
        """
        if not isinstance(self.row, int) or isinstance(self.row, bool):
            raise TypeError(f"Row must be int, got {type(self.row).__name__}")
        if not isinstance(self.column_id, str):
            raise TypeError(
                f"Column id must be str, got {type(self.column_id).__name__}"
            )

    def __str__(self) -> str:
        """Short form used in log messages."""
        return f"{self.column_id}[{self.row}]"


@dataclass(frozen=True, order=True)
class RecordKey:
    """Composite identity of a record.

    Attributes:
        query_id: Conversation/query identifier
        turn: Turn number within the query

    Example:
        >>> str(RecordKey("Q1", 2))
        '(Q1, 2)'
    """

    query_id: str
    turn: int

    def __str__(self) -> str:
        """Human-readable key."""
        return f"({self.query_id}, {self.turn})"
