"""Schema definition: blueprints compile table descriptions to DDL."""

from .blueprint import Blueprint, ColumnDefinition, sql_literal
from .facade import Schema

__all__ = [
    "Blueprint",
    "ColumnDefinition",
    "Schema",
    "sql_literal",
]
