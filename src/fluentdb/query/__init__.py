"""Fluent query building: ``db.table(name)`` → chain → terminal call."""

from .builder import QueryBuilder

__all__ = [
    "QueryBuilder",
]
