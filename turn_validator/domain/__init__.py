"""Domain layer for the turn validator.

This layer contains:
- Value Objects: immutable primitives (column rules, cell ids, violations)
- Entities: records, mutable rows of raw cell values
- Domain Services: the record index
- Helpers: cell value parsing

The domain layer has no dependencies outside the Python stdlib.
"""
