"""Domain entities."""

from .record import Record

__all__ = ["Record"]
