"""
fluentdb - a fluent relational data layer.

Query builder, schema blueprints, migrations and seeders over one
explicitly passed database adapter (MySQL in production, SQLite for
development and tests).
"""

__version__ = "0.1.0"

from fluentdb.core.adapters import DatabaseAdapter, create_adapter, get_adapter
from fluentdb.query import QueryBuilder
from fluentdb.schema import Blueprint, ColumnDefinition, Schema

__all__ = [
    "__version__",
    "Blueprint",
    "ColumnDefinition",
    "DatabaseAdapter",
    "QueryBuilder",
    "Schema",
    "create_adapter",
    "get_adapter",
]
