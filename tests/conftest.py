"""Pytest configuration and fixtures for turn validator tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import turn_validator
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from turn_validator import ColumnRule, ValidationEngine


@pytest.fixture
def column_rules() -> list[ColumnRule]:
    """Rules for a small test-case sheet."""
    return [
        ColumnRule("QueryID", required=True, pattern=r"Q[0-9]+"),
        ColumnRule("Turn", required=True, data_type="number"),
        ColumnRule("Utterance", required=True, separators=()),
        ColumnRule("Topic", allowed_values=("Greeting", "Billing", "Escalate")),
        ColumnRule("Tags", multiplicity="multiple", pattern=r"[a-z]+"),
        ColumnRule("ConversationId", data_type="guid"),
    ]


@pytest.fixture
def valid_records() -> list[dict[str, str]]:
    """Two queries with clean, contiguous turns."""
    return [
        {"QueryID": "Q1", "Turn": "1", "Utterance": "Hi", "Topic": "Greeting"},
        {"QueryID": "Q1", "Turn": "2", "Utterance": "What do I owe?", "Topic": "Billing"},
        {"QueryID": "Q2", "Turn": "1", "Utterance": "Agent please", "Topic": "Escalate"},
    ]


@pytest.fixture
def engine(column_rules) -> ValidationEngine:
    """Engine with the test rules and no data."""
    return ValidationEngine(column_rules)


@pytest.fixture
def rule_document() -> dict:
    """Rule document as it would come out of a YAML file."""
    return {
        "version": "1.0",
        "identity": {"query_id": "QueryID", "turn": "Turn"},
        "sequence": {"base": 1, "severity": "error"},
        "columns": [
            {"column": "QueryID", "required": True},
            {"column": "Turn", "required": True, "type": "number"},
            {"column": "Topic", "allowed": ["Greeting", "Billing"]},
        ],
    }
