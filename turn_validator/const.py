"""Constants for the turn validator.

Column rule definitions live in YAML configuration files; this file only
holds the defaults the engine falls back to.
"""

from __future__ import annotations

# Record identity columns
DEFAULT_QUERY_ID_COLUMN = "QueryID"
DEFAULT_TURN_COLUMN = "Turn"

# First turn number of every query
DEFAULT_TURN_BASE = 1

# Characters that separate items in a multi-value cell
DEFAULT_LIST_SEPARATORS = (",", ";")

# Accepted date layouts for `date` columns (strptime syntax)
DEFAULT_DATE_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y-%m-%dT%H:%M:%S",
)

# 8-4-4-4-12 hex grouping, optionally wrapped in braces
_GUID_CORE = (
    "[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
)
GUID_REGEX = "(?:" + _GUID_CORE + "|\\{" + _GUID_CORE + "\\})"

# Rule file major version this package understands
SUPPORTED_CONFIG_MAJOR_VERSION = "1"

# Highlight colours (ARGB-less hex, as spreadsheet tools expect)
ERROR_FILL_COLOR = "FFC7CE"  # light red
WARNING_FILL_COLOR = "FFEB9C"  # amber
