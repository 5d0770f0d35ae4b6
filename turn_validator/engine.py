"""Validation engine: the orchestrator the host application drives.

The engine owns the global ON/OFF state, the record snapshot and the current
violation mapping. The host feeds it edit events and reads the mapping back;
rendering (cell highlight, comments) is left to the host.

The engine is synchronous and not thread-safe. Call it from one thread, one
event at a time, and create one engine per dataset.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

from .config_loader import RuleConfig, load_config, parse_config
from .domain.entities import Record
from .domain.exceptions import ConfigurationError, UnknownColumnError
from .domain.services import RecordIndex, RecordRef
from .domain.value_objects import (
    CellId,
    ColumnRule,
    IdentityColumns,
    SequencePolicy,
    Violation,
)
from .infrastructure.state_machines import (
    ValidationEvent,
    ValidationState,
    ValidationStateMachine,
)
from .validation import CrossRecordValidator, FieldValidator

_LOGGER = logging.getLogger(__name__)

ViolationMap = dict[CellId, tuple[Violation, ...]]
ViolationListener = Callable[[ViolationMap], None]
RecordInput = Union[Record, Mapping[str, Any]]


class ValidationEngine:
    """Real-time validation of a tabular dataset.

    States:
        DISABLED (initial): the violation mapping is always empty; edits are
            stored but not validated.
        ENABLED: the mapping reflects the current snapshot. Entering this
            state recomputes everything from scratch, so edits made while
            disabled are reconciled.

    Cell edits while enabled re-run the field checks for that cell only. An
    edit to an identity column (query id or turn) also re-runs the
    cross-record checks over the whole dataset, since it can change the
    duplicate/sequence status of other records.

    Example:
        >>> engine = ValidationEngine([ColumnRule("QueryID", required=True),
        ...                            ColumnRule("Turn", required=True, data_type="number")])
        >>> engine.load_dataset([{"QueryID": "Q1", "Turn": "1"},
        ...                      {"QueryID": "Q1", "Turn": "3"}])
        >>> engine.toggle()
        True
        >>> [v.kind.value for v in engine.violations_for(CellId(1, "Turn"))]
        ['sequence-gap']
    """

    def __init__(
        self,
        rules: Iterable[ColumnRule],
        *,
        identity: Optional[IdentityColumns] = None,
        sequence_policy: Optional[SequencePolicy] = None,
    ) -> None:
        """Initialize the engine in the DISABLED state with an empty dataset.

        Args:
            rules: Column rules, in display order
            identity: Record identity columns (defaults to QueryID/Turn)
            sequence_policy: Turn numbering policy (defaults to base 1, strict)

        Raises:
            ConfigurationError: If a rule is not a ColumnRule or a column is
                ruled twice
        """
        self._rules: dict[str, ColumnRule] = {}
        for rule in rules:
            if not isinstance(rule, ColumnRule):
                raise ConfigurationError(
                    f"Column rules must be ColumnRule instances, got {type(rule).__name__}"
                )
            if rule.column_id in self._rules:
                raise ConfigurationError("column is defined twice", column=rule.column_id)
            self._rules[rule.column_id] = rule
        self._column_order = {column_id: pos for pos, column_id in enumerate(self._rules)}

        self._identity = identity or IdentityColumns()
        self._field_validator = FieldValidator()
        self._cross_validator = CrossRecordValidator(self._identity, sequence_policy)
        self._index = RecordIndex(identity=self._identity)
        self._state_machine = ValidationStateMachine()

        self._field_violations: dict[CellId, frozenset[Violation]] = {}
        self._cross_violations: dict[CellId, frozenset[Violation]] = {}
        self._listeners: list[ViolationListener] = []

        _LOGGER.debug(
            "Validation engine created: %d column rules, identity %s/%s",
            len(self._rules),
            self._identity.query_id,
            self._identity.turn,
        )

    @classmethod
    def from_config(cls, config: Union[RuleConfig, Mapping[str, Any]]) -> ValidationEngine:
        """Create an engine from a rule document or a parsed RuleConfig."""
        if not isinstance(config, RuleConfig):
            config = parse_config(config)
        return cls(
            config.rules,
            identity=config.identity,
            sequence_policy=config.sequence_policy,
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> ValidationEngine:
        """Create an engine from a YAML rule file."""
        return cls.from_config(load_config(path))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ValidationState:
        """Current validation state."""
        return self._state_machine.state

    @property
    def is_enabled(self) -> bool:
        """Whether validation is on."""
        return self._state_machine.is_enabled

    @property
    def rules(self) -> tuple[ColumnRule, ...]:
        """Column rules in display order."""
        return tuple(self._rules.values())

    @property
    def identity(self) -> IdentityColumns:
        """Record identity columns."""
        return self._identity

    @property
    def records(self) -> tuple[Record, ...]:
        """Copy of the current snapshot, in row order."""
        return tuple(record.copy() for record in self._index)

    def toggle(self) -> bool:
        """Flip validation on or off.

        Turning on recomputes every violation over the whole dataset. Turning
        off clears the mapping at once without running any check.

        Returns:
            The new enabled state
        """
        self._state_machine.toggle()
        self._apply_state()
        return self.is_enabled

    def enable(self) -> bool:
        """Turn validation on (no-op if already on).

        Returns:
            True if the state changed
        """
        if not self._state_machine.transition(ValidationEvent.ENABLE):
            return False
        self._apply_state()
        return True

    def disable(self) -> bool:
        """Turn validation off (no-op if already off).

        Returns:
            True if the state changed
        """
        if not self._state_machine.transition(ValidationEvent.DISABLE):
            return False
        self._apply_state()
        return True

    def _apply_state(self) -> None:
        """Bring the violation mapping in line with the state just entered."""
        if self.is_enabled:
            self._recompute()
        else:
            self._clear()
        self._emit()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def load_dataset(self, records: Iterable[RecordInput]) -> None:
        """Replace the whole dataset snapshot.

        While enabled this recomputes everything, exactly as turning
        validation on does. While disabled no check runs.

        Args:
            records: Records in row order (Record instances or mappings of
                column id to value); they are copied
        """
        self._index.load(records)
        if not self.is_enabled:
            self._clear()
            _LOGGER.debug("Dataset loaded while disabled: %d records", len(self._index))
            return
        self._recompute()
        self._emit()

    def on_bulk_load(self, records: Iterable[RecordInput]) -> None:
        """Host event: the whole dataset was replaced."""
        self.load_dataset(records)

    def set_cell(self, record: RecordRef, column_id: str, value: Any) -> None:
        """Store a new cell value and revalidate what it affects.

        Args:
            record: Row position, or the record's (query id, turn) key
            column_id: Column of the edited cell
            value: New raw value (None means blank)

        Raises:
            UnknownRecordError: If record matches no loaded record
            AmbiguousRecordError: If record is a key shared by several records
            UnknownColumnError: If column_id is not ruled and not on the record
        """
        row = self._index.resolve(record)
        self.on_cell_changed(CellId(row, column_id), value)

    def on_cell_changed(self, cell_id: CellId, value: Any) -> None:
        """Host event: one cell was edited.

        The value is always stored. While disabled nothing else happens.

        Raises:
            UnknownRecordError: If the cell's row is not in the dataset
            UnknownColumnError: If the column is not ruled and not on the record
        """
        record = self._index.record(cell_id.row)
        if cell_id.column_id not in self._rules and not record.has_column(cell_id.column_id):
            raise UnknownColumnError(
                f"Column '{cell_id.column_id}' has no rule and is not on row {cell_id.row}"
            )

        key_changed = self._index.set_value(cell_id.row, cell_id.column_id, value)
        if not self.is_enabled:
            return

        self._validate_field(cell_id)
        if cell_id.column_id in self._identity:
            _LOGGER.debug(
                "Identity cell %s edited (key changed: %s); re-running cross-record checks",
                cell_id,
                key_changed,
            )
            self._refresh_cross_record()
        self._emit()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def get_violations(self) -> ViolationMap:
        """Return the current violation mapping.

        Returns:
            Cell id -> violations, cells in row then column order and
            violations in kind order. Empty while disabled. The mapping is a
            fresh copy on every call.
        """
        merged: dict[CellId, set[Violation]] = {}
        for source in (self._field_violations, self._cross_violations):
            for cell_id, violations in source.items():
                merged.setdefault(cell_id, set()).update(violations)

        return {
            cell_id: tuple(sorted(merged[cell_id], key=lambda v: v.sort_key))
            for cell_id in sorted(merged, key=self._cell_sort_key)
        }

    def violations_for(self, cell_id: CellId) -> tuple[Violation, ...]:
        """Violations currently attached to one cell."""
        found = self._field_violations.get(cell_id, frozenset()) | self._cross_violations.get(
            cell_id, frozenset()
        )
        return tuple(sorted(found, key=lambda v: v.sort_key))

    def violations_for_record(self, row: int) -> ViolationMap:
        """Violations on every cell of one record."""
        self._index.record(row)
        return {
            cell_id: violations
            for cell_id, violations in self.get_violations().items()
            if cell_id.row == row
        }

    def explain(self, cell_id: CellId) -> str:
        """Comment text for one cell, one line per violation ('' when clean)."""
        return "\n".join(violation.message for violation in self.violations_for(cell_id))

    def subscribe(self, listener: ViolationListener) -> Callable[[], None]:
        """Register a callback for violation mapping updates.

        The listener is called with the full mapping after every toggle, and
        after every load or edit while enabled.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _recompute(self) -> None:
        """Run every check over the whole snapshot."""
        self._field_violations = {}
        for row, record in enumerate(self._index):
            for column_id, rule in self._rules.items():
                cell_id = CellId(row, column_id)
                found = self._field_validator.validate_cell(record.get(column_id), rule, cell_id)
                if found:
                    self._field_violations[cell_id] = found
        self._refresh_cross_record()

        _LOGGER.debug(
            "Full recompute: %d records, %d cells flagged",
            len(self._index),
            len(set(self._field_violations) | set(self._cross_violations)),
        )

    def _validate_field(self, cell_id: CellId) -> None:
        """Replace one cell's field violations."""
        rule = self._rules.get(cell_id.column_id)
        if rule is None:
            return
        value = self._index.record(cell_id.row).get(cell_id.column_id)
        found = self._field_validator.validate_cell(value, rule, cell_id)
        if found:
            self._field_violations[cell_id] = found
        else:
            self._field_violations.pop(cell_id, None)

    def _refresh_cross_record(self) -> None:
        """Replace all cross-record violations."""
        grouped: dict[CellId, set[Violation]] = {}
        for violation in self._cross_validator.validate_dataset(self._index):
            grouped.setdefault(violation.cell_id, set()).add(violation)
        self._cross_violations = {
            cell_id: frozenset(violations) for cell_id, violations in grouped.items()
        }

    def _clear(self) -> None:
        """Drop every violation."""
        self._field_violations = {}
        self._cross_violations = {}

    def _cell_sort_key(self, cell_id: CellId) -> tuple[int, int, str]:
        return (
            cell_id.row,
            self._column_order.get(cell_id.column_id, len(self._column_order)),
            cell_id.column_id,
        )

    def _emit(self) -> None:
        """Send the current mapping to every listener."""
        if not self._listeners:
            return
        violations = self.get_violations()
        for listener in list(self._listeners):
            try:
                listener(violations)
            except Exception as err:
                _LOGGER.error("Error in violation listener %r: %s", listener, err)

    def __repr__(self) -> str:
        """Developer representation."""
        return (
            f"ValidationEngine(state={self.state.name}, records={len(self._index)}, "
            f"columns={len(self._rules)})"
        )
