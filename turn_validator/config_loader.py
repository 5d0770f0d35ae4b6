"""Configuration loader for column rule definitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import voluptuous as vol
import yaml

from .const import (
    DEFAULT_QUERY_ID_COLUMN,
    DEFAULT_TURN_BASE,
    DEFAULT_TURN_COLUMN,
    SUPPORTED_CONFIG_MAJOR_VERSION,
)
from .domain.exceptions import ConfigurationError
from .domain.value_objects import (
    ColumnRule,
    IdentityColumns,
    SequencePolicy,
    Severity,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "config" / "columns.yaml"

_NON_EMPTY_STR = vol.All(str, vol.Length(min=1))

COLUMN_SCHEMA = vol.Schema(
    {
        vol.Required("column"): _NON_EMPTY_STR,
        vol.Optional("required", default=False): bool,
        vol.Optional("type", default="text"): str,
        vol.Optional("allowed"): vol.All([vol.Coerce(str)], vol.Length(min=1)),
        vol.Optional("pattern"): str,
        vol.Optional("multiplicity", default="single"): str,
        vol.Optional("separators"): [_NON_EMPTY_STR],
        vol.Optional("date_formats"): vol.All([_NON_EMPTY_STR], vol.Length(min=1)),
        vol.Optional("description", default=""): vol.Any(str, None),
    }
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required("version"): vol.Coerce(str),
        vol.Optional("identity", default={}): {
            vol.Optional("query_id", default=DEFAULT_QUERY_ID_COLUMN): _NON_EMPTY_STR,
            vol.Optional("turn", default=DEFAULT_TURN_COLUMN): _NON_EMPTY_STR,
        },
        vol.Optional("sequence", default={}): {
            vol.Optional("base", default=DEFAULT_TURN_BASE): int,
            vol.Optional("severity", default=Severity.ERROR.value): vol.In(
                [severity.value for severity in Severity]
            ),
        },
        vol.Required("columns"): vol.All([dict], vol.Length(min=1)),
    }
)


@dataclass(frozen=True)
class RuleConfig:
    """Parsed rule file.

    Attributes:
        version: Rule file version string
        rules: Column rules in file order
        identity: Record identity columns
        sequence_policy: Turn numbering policy
    """

    version: str
    rules: tuple[ColumnRule, ...]
    identity: IdentityColumns
    sequence_policy: SequencePolicy


def parse_config(config: Any) -> RuleConfig:
    """Validate a rule document and build its rules.

    Args:
        config: Rule document, as loaded from YAML

    Returns:
        RuleConfig

    Raises:
        ConfigurationError: If the document or any column rule is invalid
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"Rule configuration must be a mapping, got {type(config).__name__}"
        )

    try:
        validated = CONFIG_SCHEMA(dict(config))
    except vol.Invalid as err:
        raise ConfigurationError(f"Invalid rule configuration: {err}") from err

    version = validated["version"]
    if version.split(".")[0] != SUPPORTED_CONFIG_MAJOR_VERSION:
        raise ConfigurationError(
            f"Rule file version {version} not supported. "
            f"Only version {SUPPORTED_CONFIG_MAJOR_VERSION}.x is supported."
        )

    rules = []
    seen: set[str] = set()
    for idx, column_config in enumerate(validated["columns"]):
        name = column_config.get("column") or f"#{idx}"
        try:
            column_config = COLUMN_SCHEMA(column_config)
        except vol.Invalid as err:
            raise ConfigurationError(
                f"invalid column definition: {err}", column=str(name)
            ) from err

        if column_config["column"] in seen:
            raise ConfigurationError("column is defined twice", column=column_config["column"])
        seen.add(column_config["column"])
        rules.append(ColumnRule.from_config(column_config))

    identity = IdentityColumns(**validated["identity"])
    sequence_policy = SequencePolicy(**validated["sequence"])

    return RuleConfig(
        version=version,
        rules=tuple(rules),
        identity=identity,
        sequence_policy=sequence_policy,
    )


def load_config(path: str | Path) -> RuleConfig:
    """Load and validate a rule file from YAML.

    Args:
        path: Path to the YAML rule file

    Returns:
        RuleConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_file = Path(path)
    if not config_file.exists():
        raise ConfigurationError(f"Rule file not found: {config_file}")

    try:
        content = config_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigurationError(f"Cannot read rule file {config_file}: {err}") from err

    try:
        config = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {err}") from err

    if not config:
        raise ConfigurationError(f"Rule file is empty: {config_file}")

    rule_config = parse_config(config)

    _LOGGER.info(
        "Loaded rule file %s (version %s): %d columns, identity %s/%s",
        config_file.name,
        rule_config.version,
        len(rule_config.rules),
        rule_config.identity.query_id,
        rule_config.identity.turn,
    )
    return rule_config


def load_rules(path: str | Path) -> tuple[ColumnRule, ...]:
    """Load only the column rules from a rule file."""
    return load_config(path).rules


def load_default_rules() -> RuleConfig:
    """Load the bundled rule file for the agent test-case sheet."""
    return load_config(DEFAULT_RULES_PATH)
