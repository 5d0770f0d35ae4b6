"""Domain services."""

from .record_index import RecordIndex, RecordRef

__all__ = ["RecordIndex", "RecordRef"]
