"""fluentdb core -- errors, logging, settings, dialects and adapters.

Architecture::

    errors.py          Structured error hierarchy (FluentDBError, QueryError)
    logging.py         structlog configuration + get_logger
    settings.py        pydantic-settings DatabaseSettings / AppSettings
    protocols.py       DB-API connection protocol
    dialect.py         MySQL (production) and SQLite (dev/test) SQL text
    adapters/          Live connections + registry

Nothing in this package imports the query, schema or migration layers.
"""

from fluentdb.core.dialect import ColumnType, Dialect, get_dialect
from fluentdb.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    FluentDBError,
    IntegrityError,
    MalformedQueryError,
    MigrationError,
    QueryError,
    SchemaError,
    ValidationError,
)
from fluentdb.core.logging import configure_logging, get_logger
from fluentdb.core.settings import AppSettings, DatabaseSettings

__all__ = [
    "AppSettings",
    "ColumnType",
    "ConfigError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseSettings",
    "Dialect",
    "FluentDBError",
    "IntegrityError",
    "MalformedQueryError",
    "MigrationError",
    "QueryError",
    "SchemaError",
    "ValidationError",
    "configure_logging",
    "get_dialect",
    "get_logger",
]
