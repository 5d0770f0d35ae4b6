"""Type Validation rule.

Validate that a value parses as the column's declared data type.
"""

from typing import Optional

from ..domain.helpers import describe_date_format, is_guid, parse_date, parse_number
from ..domain.value_objects import ColumnRule, DataType, ViolationKind
from .validation_rule import ValidationRule

_TYPE_LABELS = {
    DataType.NUMBER: "number",
    DataType.DATE: "date",
    DataType.GUID: "GUID",
}


class TypeValidation(ValidationRule):
    """Validate the value's data type.

    YAML configuration:
        column: ConversationId
        type: guid          # text | number | date | guid
        date_formats:       # optional, date columns only
          - "%Y-%m-%d"

    Text columns accept anything.
    """

    kind = ViolationKind.TYPE

    def applies_to(self, column: ColumnRule) -> bool:
        """Text columns have no type constraint."""
        return column.data_type is not DataType.TEXT

    def validate(self, value: str, column: ColumnRule) -> Optional[str]:
        """Check every candidate value parses as the declared type."""
        failing = [
            item
            for item in self.candidate_values(value, column)
            if not self._matches_type(item, column)
        ]
        if not failing:
            return None

        label = _TYPE_LABELS[column.data_type]
        if column.allows_multiple:
            message = f"Items {self.quote_items(failing)} are not valid {label} values"
        else:
            message = f"'{failing[0]}' is not a valid {label}"
        return message + self._hint(column)

    @staticmethod
    def _matches_type(item: str, column: ColumnRule) -> bool:
        if column.data_type is DataType.NUMBER:
            return parse_number(item) is not None
        if column.data_type is DataType.DATE:
            return parse_date(item, column.date_formats) is not None
        if column.data_type is DataType.GUID:
            return is_guid(item)
        return True

    @staticmethod
    def _hint(column: ColumnRule) -> str:
        if column.data_type is DataType.DATE:
            layouts = ", ".join(describe_date_format(fmt) for fmt in column.date_formats)
            return f" (expected {layouts})"
        if column.data_type is DataType.GUID:
            return " (expected xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx)"
        return ""
