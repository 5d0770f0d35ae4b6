"""Tests for rule file loading."""

import pytest

from turn_validator import ColumnRule, ValidationEngine
from turn_validator.config_loader import (
    DEFAULT_RULES_PATH,
    load_config,
    load_default_rules,
    load_rules,
    parse_config,
)
from turn_validator.domain.exceptions import ConfigurationError
from turn_validator.domain.value_objects import (
    CellId,
    DataType,
    Multiplicity,
    Severity,
    ViolationKind,
)

RULE_FILE = """
version: "1.0"
identity:
  query_id: Case
  turn: Step
sequence:
  base: 0
  severity: warning
columns:
  - column: Case
    required: true
  - column: Step
    required: true
    type: number
  - column: Labels
    multiplicity: multiple
    separators: ["|"]
    allowed: [a, b]
"""


@pytest.fixture
def rule_file(tmp_path):
    """Rule file on disk."""
    path = tmp_path / "rules.yaml"
    path.write_text(RULE_FILE, encoding="utf-8")
    return path


class TestParseConfig:
    """Test parse_config function."""

    def test_defaults_filled(self, rule_document):
        """Test identity and sequence sections default when absent."""
        del rule_document["identity"]
        del rule_document["sequence"]
        config = parse_config(rule_document)
        assert config.identity.columns == ("QueryID", "Turn")
        assert config.sequence_policy.base == 1
        assert config.sequence_policy.severity is Severity.ERROR

    def test_rules_in_order(self, rule_document):
        """Test rules are built in document order."""
        config = parse_config(rule_document)
        assert [rule.column_id for rule in config.rules] == ["QueryID", "Turn", "Topic"]
        assert all(isinstance(rule, ColumnRule) for rule in config.rules)

    def test_numeric_version_accepted(self, rule_document):
        """Test an unquoted YAML version is accepted."""
        rule_document["version"] = 1.2
        assert parse_config(rule_document).version == "1.2"

    def test_unsupported_version(self, rule_document):
        """Test other major versions are refused."""
        rule_document["version"] = "2.0"
        with pytest.raises(ConfigurationError, match="version 2.0 not supported"):
            parse_config(rule_document)

    def test_missing_columns(self, rule_document):
        """Test a document without columns is refused."""
        del rule_document["columns"]
        with pytest.raises(ConfigurationError, match="Invalid rule configuration"):
            parse_config(rule_document)

    def test_unknown_column_key_names_column(self, rule_document):
        """Test a typo in a column entry is refused naming the column."""
        rule_document["columns"][2]["alowed"] = ["x"]
        with pytest.raises(ConfigurationError) as exc:
            parse_config(rule_document)
        assert exc.value.column == "Topic"

    def test_bad_pattern_names_column(self, rule_document):
        """Test a pattern that does not compile names the column."""
        rule_document["columns"][0]["pattern"] = "("
        with pytest.raises(ConfigurationError) as exc:
            parse_config(rule_document)
        assert exc.value.column == "QueryID"

    def test_duplicate_column(self, rule_document):
        """Test a column defined twice is refused."""
        rule_document["columns"].append({"column": "Turn"})
        with pytest.raises(ConfigurationError, match="defined twice"):
            parse_config(rule_document)

    def test_bad_severity(self, rule_document):
        """Test sequence severity must be error or warning."""
        rule_document["sequence"]["severity"] = "fatal"
        with pytest.raises(ConfigurationError):
            parse_config(rule_document)

    def test_not_a_mapping(self):
        """Test a non-mapping document is refused."""
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            parse_config(["columns"])


class TestLoadConfig:
    """Test loading rule files from disk."""

    def test_load(self, rule_file):
        """Test every section is read from YAML."""
        config = load_config(rule_file)
        assert config.identity.columns == ("Case", "Step")
        assert config.sequence_policy.base == 0
        assert config.sequence_policy.severity is Severity.WARNING
        labels = config.rules[2]
        assert labels.multiplicity is Multiplicity.MULTIPLE
        assert labels.separators == ("|",)

    def test_load_rules(self, rule_file):
        """Test loading only the rules."""
        assert [rule.column_id for rule in load_rules(rule_file)] == ["Case", "Step", "Labels"]

    def test_missing_file(self, tmp_path):
        """Test a missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test unparsable YAML is a configuration error."""
        path = tmp_path / "broken.yaml"
        path.write_text("columns: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_empty_file(self, tmp_path):
        """Test an empty file is a configuration error."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="empty"):
            load_config(path)

    def test_directory_path(self, tmp_path):
        """Test a directory in place of a file is a configuration error."""
        with pytest.raises(ConfigurationError, match="Cannot read rule file"):
            load_config(tmp_path)

    def test_not_utf8(self, tmp_path):
        """Test a file that is not UTF-8 is a configuration error."""
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"version: '1.0'\ncolumns:\n  - column: Caf\xff\n")
        with pytest.raises(ConfigurationError, match="Cannot read rule file"):
            load_config(path)

    def test_engine_from_yaml(self, rule_file):
        """Test an engine built from a file uses its identity and policy."""
        engine = ValidationEngine.from_yaml(rule_file)
        engine.load_dataset(
            [{"Case": "C1", "Step": "0"}, {"Case": "C1", "Step": "2", "Labels": "a|c"}]
        )
        engine.toggle()
        violations = engine.get_violations()
        (gap,) = violations[CellId(1, "Step")]
        assert gap.kind is ViolationKind.SEQUENCE_GAP
        assert gap.severity is Severity.WARNING
        assert [v.kind for v in violations[CellId(1, "Labels")]] == [
            ViolationKind.ALLOWED_VALUES
        ]


class TestDefaultRules:
    """Test the bundled rule file."""

    def test_bundled_file_exists(self):
        """Test the default rule file ships with the package."""
        assert DEFAULT_RULES_PATH.exists()

    def test_default_rules_load(self):
        """Test the bundled rules describe the test-case sheet."""
        config = load_default_rules()
        columns = {rule.column_id: rule for rule in config.rules}
        assert config.identity.columns == ("QueryID", "Turn")
        assert columns["Turn"].data_type is DataType.NUMBER
        assert columns["ConversationId"].data_type is DataType.GUID
        assert columns["Score"].allowed_values == ("1", "2", "3", "4", "5")
        assert columns["Utterance"].separators == ()

    def test_default_rules_accept_clean_row(self):
        """Test a well-formed row passes the bundled rules."""
        engine = ValidationEngine.from_config(load_default_rules())
        engine.load_dataset(
            [
                {
                    "QueryID": "Q-001",
                    "Turn": "1",
                    "Utterance": "Hi, I need help with my bill.",
                    "ExpectedResponse": "Sure, let me look that up.",
                    "ExpectedTopic": "Greeting",
                    "Tags": "billing, smoke",
                    "ConversationId": "550e8400-e29b-41d4-a716-446655440000",
                    "LastRunDate": "2026-10-01",
                    "Score": "4",
                }
            ]
        )
        engine.toggle()
        assert engine.get_violations() == {}
