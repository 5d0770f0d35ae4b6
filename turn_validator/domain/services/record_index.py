"""Service for indexing records by identity key."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from ..entities import Record
from ..exceptions import AmbiguousRecordError, UnknownRecordError
from ..value_objects import IdentityColumns, RecordKey

_LOGGER = logging.getLogger(__name__)

RecordRef = Union[int, RecordKey]


class RecordIndex:
    """Ordered record store with a (query id, turn) lookup.

    Records keep their load position ("row") for their whole lifetime, and the
    key map is kept in step with every identity-column edit. Duplicate keys
    are stored as-is; reporting them is the cross-record validator's job.

    Example:
        >>> index = RecordIndex([{"QueryID": "Q1", "Turn": "1"}])
        >>> index.rows_for_key(RecordKey("Q1", 1))
        (0,)
        >>> index.set_value(0, "Turn", "2")
        True
        >>> index.key_of(0)
        RecordKey(query_id='Q1', turn=2)
    """

    def __init__(
        self,
        records: Iterable[Union[Record, Mapping[str, Any]]] = (),
        identity: Optional[IdentityColumns] = None,
    ) -> None:
        """Initialize the index.

        Args:
            records: Initial records (Record instances or plain mappings)
            identity: Identity columns (defaults to QueryID/Turn)
        """
        self._identity = identity or IdentityColumns()
        self._records: list[Record] = []
        self._keys: list[Optional[RecordKey]] = []
        self._rows_by_key: dict[RecordKey, list[int]] = {}
        self.load(records)

    @property
    def identity(self) -> IdentityColumns:
        """Identity columns used to derive keys."""
        return self._identity

    def load(self, records: Iterable[Union[Record, Mapping[str, Any]]]) -> None:
        """Replace the whole snapshot.

        Records are copied, so later changes made by the caller to the
        objects passed in are not seen by the index.
        """
        self._records = [
            record.copy() if isinstance(record, Record) else Record.from_mapping(record)
            for record in records
        ]
        self._keys = [record.key(self._identity) for record in self._records]
        self._rows_by_key = {}
        for row, key in enumerate(self._keys):
            if key is not None:
                self._rows_by_key.setdefault(key, []).append(row)

        _LOGGER.debug(
            "Record index loaded: %d records, %d distinct keys",
            len(self._records),
            len(self._rows_by_key),
        )

    def __len__(self) -> int:
        """Number of records."""
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        """Iterate records in row order."""
        return iter(self._records)

    def record(self, row: int) -> Record:
        """Return the record at row.

        Raises:
            UnknownRecordError: If row is outside the loaded dataset
        """
        if isinstance(row, bool) or not isinstance(row, int) or not 0 <= row < len(self._records):
            raise UnknownRecordError(
                f"Row {row!r} is not in the loaded dataset ({len(self._records)} records)"
            )
        return self._records[row]

    def key_of(self, row: int) -> Optional[RecordKey]:
        """Return the identity key of the record at row (None if it has none)."""
        self.record(row)
        return self._keys[row]

    def rows_for_key(self, key: RecordKey) -> tuple[int, ...]:
        """Rows whose records share key, in row order."""
        return tuple(self._rows_by_key.get(key, ()))

    def resolve(self, ref: RecordRef) -> int:
        """Turn a row position or a record key into a row position.

        Args:
            ref: Row position, or the record's (query id, turn) key

        Returns:
            Row position

        Raises:
            UnknownRecordError: If nothing matches ref
            AmbiguousRecordError: If ref is a key shared by several records
        """
        if isinstance(ref, RecordKey):
            rows = self.rows_for_key(ref)
            if not rows:
                raise UnknownRecordError(f"No record with key {ref}")
            if len(rows) > 1:
                raise AmbiguousRecordError(
                    f"Key {ref} is shared by {len(rows)} records; address the record by row"
                )
            return rows[0]

        self.record(ref)
        return ref

    def set_value(self, row: int, column_id: str, value: Any) -> bool:
        """Store a cell value and keep the key map current.

        Returns:
            True if the record's identity key changed
        """
        record = self.record(row)
        record.set(column_id, value)
        if column_id not in self._identity:
            return False

        old_key = self._keys[row]
        new_key = record.key(self._identity)
        if new_key == old_key:
            return False

        if old_key is not None:
            rows = self._rows_by_key[old_key]
            rows.remove(row)
            if not rows:
                del self._rows_by_key[old_key]
        if new_key is not None:
            rows = self._rows_by_key.setdefault(new_key, [])
            rows.append(row)
            rows.sort()
        self._keys[row] = new_key

        _LOGGER.debug("Row %d key changed: %s -> %s", row, old_key, new_key)
        return True

    def key_counts(self) -> Counter:
        """Occurrences of every identity key."""
        return Counter({key: len(rows) for key, rows in self._rows_by_key.items()})

    def query_groups(self) -> dict[str, list[tuple[int, int]]]:
        """Group keyed records by query id.

        Returns:
            query id -> [(row, turn), ...], queries in first-seen order and
            records in row order within each query. Records without a key are
            left out.
        """
        groups: dict[str, list[tuple[int, int]]] = {}
        for row, key in enumerate(self._keys):
            if key is None:
                continue
            groups.setdefault(key.query_id, []).append((row, key.turn))
        return groups
