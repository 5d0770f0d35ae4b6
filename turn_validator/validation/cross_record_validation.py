"""Cross-Record Validation.

Validate relationships between records: identity keys must be unique and the
turns of each query must run contiguously from the policy's base.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from ..domain.entities import Record
from ..domain.services import RecordIndex
from ..domain.value_objects import (
    CellId,
    IdentityColumns,
    SequencePolicy,
    Violation,
    ViolationKind,
)

_LOGGER = logging.getLogger(__name__)


class CrossRecordValidator:
    """Duplicate-key and turn-sequence checks over the whole dataset.

    Only the identity columns are looked at. Records whose query id is blank
    or whose turn is not an integer have no key and are skipped; the field
    validator reports those cells.

    The result depends only on the records, so re-running on an unchanged
    dataset yields the same set.

    Example:
        >>> validator = CrossRecordValidator()
        >>> found = validator.validate_dataset([
        ...     {"QueryID": "Q1", "Turn": "1"},
        ...     {"QueryID": "Q1", "Turn": "3"},
        ... ])
        >>> sorted(str(v.cell_id) for v in found)
        ['Turn[1]']
    """

    def __init__(
        self,
        identity: Optional[IdentityColumns] = None,
        policy: Optional[SequencePolicy] = None,
    ) -> None:
        """Initialize the validator.

        Args:
            identity: Identity columns used when given plain records
            policy: Turn numbering policy (base 1, gaps are errors by default)
        """
        self._identity = identity or IdentityColumns()
        self._policy = policy or SequencePolicy()

    @property
    def policy(self) -> SequencePolicy:
        """Turn numbering policy."""
        return self._policy

    def validate_dataset(
        self, records: Union[RecordIndex, Iterable[Union[Record, Mapping[str, Any]]]]
    ) -> frozenset[Violation]:
        """Run every cross-record check.

        Args:
            records: A RecordIndex, or an ordered sequence of records

        Returns:
            Set of duplicate-key and sequence-gap violations
        """
        if isinstance(records, RecordIndex):
            index = records
        else:
            index = RecordIndex(records, self._identity)

        violations = frozenset(self._duplicate_key_violations(index)) | frozenset(
            self._sequence_violations(index)
        )
        _LOGGER.debug(
            "Cross-record check over %d records: %d violations",
            len(index),
            len(violations),
        )
        return violations

    def _duplicate_key_violations(self, index: RecordIndex) -> Iterator[Violation]:
        """Flag both identity cells of every record whose key is shared."""
        for key, count in index.key_counts().items():
            if count < 2:
                continue
            message = (
                f"Duplicate key {key}: {count} records share this "
                f"{index.identity.query_id} and {index.identity.turn}"
            )
            for row in index.rows_for_key(key):
                for column_id in index.identity.columns:
                    yield Violation(
                        CellId(row, column_id), ViolationKind.DUPLICATE_KEY, message
                    )

    def _sequence_violations(self, index: RecordIndex) -> Iterator[Violation]:
        """Flag every turn that breaks its query's contiguous sequence.

        Walks each query in row order keeping the highest turn seen. A repeat
        of a seen turn is left to the duplicate-key check; any other turn that
        is not exactly one above the highest is flagged.
        """
        base = self._policy.base
        turn_column = index.identity.turn

        for query_id, entries in index.query_groups().items():
            highest = base - 1
            seen: set[int] = set()
            for row, turn in entries:
                if turn in seen:
                    continue
                seen.add(turn)

                expected = highest + 1
                if turn != expected:
                    if turn < base:
                        message = (
                            f"Turn {turn} of query '{query_id}' is below "
                            f"the first turn {base}"
                        )
                    elif turn > expected:
                        message = (
                            f"Turn {turn} of query '{query_id}' skips "
                            f"turn {expected}"
                        )
                    else:
                        message = (
                            f"Turn {turn} of query '{query_id}' is out of order "
                            f"(follows turn {highest})"
                        )
                    yield Violation(
                        CellId(row, turn_column),
                        ViolationKind.SEQUENCE_GAP,
                        message,
                        self._policy.severity,
                    )

                highest = max(highest, turn)
