"""Tests for the cross-record validator."""

import pytest

from turn_validator.domain.services import RecordIndex
from turn_validator.domain.value_objects import (
    CellId,
    IdentityColumns,
    SequencePolicy,
    Severity,
    ViolationKind,
)
from turn_validator.validation import CrossRecordValidator


def rows(*keys):
    """Records from (query id, turn) pairs."""
    return [{"QueryID": query_id, "Turn": str(turn)} for query_id, turn in keys]


def flagged(violations, kind):
    """Rows carrying a violation of kind."""
    return sorted({v.cell_id.row for v in violations if v.kind is kind})


@pytest.fixture
def validator():
    """Validator with the default policy."""
    return CrossRecordValidator()


class TestDuplicateKeys:
    """Test duplicate key detection."""

    def test_duplicates_flag_every_sharing_record(self, validator):
        """Test both records sharing a key are flagged and others are not."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 1), ("Q1", 2)))
        assert flagged(found, ViolationKind.DUPLICATE_KEY) == [0, 1]
        assert not [v for v in found if v.cell_id.row == 2]

    def test_duplicate_attached_to_identity_cells(self, validator):
        """Test the violation lands on both QueryID and Turn cells."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 1)))
        cells = {v.cell_id for v in found if v.kind is ViolationKind.DUPLICATE_KEY}
        assert cells == {
            CellId(0, "QueryID"),
            CellId(0, "Turn"),
            CellId(1, "QueryID"),
            CellId(1, "Turn"),
        }

    def test_duplicate_message(self, validator):
        """Test the message names the key and the count."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 1), ("Q1", 1)))
        messages = {v.message for v in found if v.kind is ViolationKind.DUPLICATE_KEY}
        assert messages == {"Duplicate key (Q1, 1): 3 records share this QueryID and Turn"}

    def test_same_turn_different_query_is_fine(self, validator):
        """Test keys are compared as pairs."""
        assert validator.validate_dataset(rows(("Q1", 1), ("Q2", 1))) == frozenset()

    def test_integral_float_turn_matches(self, validator):
        """Test '1' and '1.0' are the same turn."""
        found = validator.validate_dataset(
            [{"QueryID": "Q1", "Turn": "1"}, {"QueryID": "Q1", "Turn": "1.0"}]
        )
        assert flagged(found, ViolationKind.DUPLICATE_KEY) == [0, 1]


class TestSequence:
    """Test turn sequence detection."""

    def test_gap_flags_second_record(self, validator):
        """Test [1, 3] flags the record with turn 3."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 3)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [1]
        (violation,) = found
        assert violation.cell_id == CellId(1, "Turn")
        assert violation.message == "Turn 3 of query 'Q1' skips turn 2"

    def test_contiguous_is_clean(self, validator):
        """Test [1, 2] flags nothing."""
        assert validator.validate_dataset(rows(("Q1", 1), ("Q1", 2))) == frozenset()

    def test_every_offender_reported(self, validator):
        """Test each gap is reported, not only the first."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 3), ("Q1", 5)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [1, 2]

    def test_continues_after_gap(self, validator):
        """Test turns following a gap contiguously are not flagged."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 3), ("Q1", 4)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [1]

    def test_must_start_at_base(self, validator):
        """Test a query starting at 2 is flagged."""
        found = validator.validate_dataset(rows(("Q1", 2), ("Q1", 3)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [0]

    def test_out_of_order(self, validator):
        """Test a turn lower than an earlier one is flagged."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 3), ("Q1", 2)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [1, 2]
        messages = {v.cell_id.row: v.message for v in found}
        assert messages[2] == "Turn 2 of query 'Q1' is out of order (follows turn 3)"

    def test_below_base(self, validator):
        """Test a turn below the base is flagged."""
        found = validator.validate_dataset(rows(("Q1", 0), ("Q1", 1)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [0]
        assert "below the first turn 1" in next(iter(found)).message

    def test_duplicates_not_double_reported_as_gaps(self, validator):
        """Test a repeated turn is only a duplicate-key violation."""
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 1), ("Q1", 2)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == []

    def test_queries_checked_independently(self, validator):
        """Test interleaved queries each run their own sequence."""
        found = validator.validate_dataset(
            rows(("Q1", 1), ("Q2", 1), ("Q1", 2), ("Q2", 2), ("Q2", 4))
        )
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [4]

    def test_keyless_records_skipped(self, validator):
        """Test records without a usable key are ignored."""
        records = rows(("Q1", 1)) + [
            {"QueryID": "Q1", "Turn": "abc"},
            {"QueryID": "", "Turn": "7"},
        ]
        assert validator.validate_dataset(records) == frozenset()


class TestPolicy:
    """Test configurable sequence policy."""

    def test_zero_base(self):
        """Test a base of 0 accepts queries starting at 0."""
        validator = CrossRecordValidator(policy=SequencePolicy(base=0))
        assert validator.validate_dataset(rows(("Q1", 0), ("Q1", 1))) == frozenset()
        found = validator.validate_dataset(rows(("Q1", 1)))
        assert flagged(found, ViolationKind.SEQUENCE_GAP) == [0]

    def test_gaps_as_warnings(self):
        """Test non-strict policy reports gaps as warnings."""
        validator = CrossRecordValidator(policy=SequencePolicy(severity=Severity.WARNING))
        (violation,) = validator.validate_dataset(rows(("Q1", 1), ("Q1", 3)))
        assert violation.severity is Severity.WARNING

    def test_duplicates_stay_errors(self):
        """Test duplicate keys are errors whatever the sequence policy."""
        validator = CrossRecordValidator(policy=SequencePolicy(severity=Severity.WARNING))
        found = validator.validate_dataset(rows(("Q1", 1), ("Q1", 1)))
        assert {v.severity for v in found} == {Severity.ERROR}


class TestIdempotence:
    """Test repeated runs."""

    def test_same_result_on_rerun(self, validator):
        """Test re-running on unchanged data gives the identical set."""
        index = RecordIndex(rows(("Q1", 1), ("Q1", 1), ("Q1", 4), ("Q2", 2)))
        assert validator.validate_dataset(index) == validator.validate_dataset(index)

    def test_accepts_index_with_custom_identity(self, validator):
        """Test a RecordIndex brings its own identity columns."""
        identity = IdentityColumns(query_id="Case", turn="Step")
        index = RecordIndex(
            [{"Case": "C1", "Step": "1"}, {"Case": "C1", "Step": "1"}], identity
        )
        found = validator.validate_dataset(index)
        assert {v.cell_id.column_id for v in found} == {"Case", "Step"}
