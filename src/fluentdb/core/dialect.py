"""SQL dialect for the builder and the schema engine.

All statement text fluentdb produces is MySQL. The handful of fragments
that an engine spells differently (auto-increment keys, table options,
table rename, catalog lookups) are asked of a ``Dialect`` so the same
blueprints and queries also run on the embedded SQLite engine used for
local development and tests.

Manifesto:
    - **One grammar:** MySQL is the production dialect; SQLite only
      overrides what it cannot parse
    - **Closed column types:** ``ColumnType`` is an enum rendered with a
      ``match`` statement, never by method-name lookup
    - **Prepared statements:** Placeholders are always ``?`` (MySQL
      prepared-statement protocol, SQLite qmark paramstyle)

Architecture::

    ┌──────────────────────────┐      ┌──────────────────────────┐
    │ MySQLDialect             │      │ SQLiteDialect            │
    │ ?, ?, ?                  │      │ ?, ?, ?                  │
    │ INT AUTO_INCREMENT PK    │      │ INTEGER PRIMARY KEY AUTO │
    │ ENGINE=InnoDB ...        │      │ (no table options)       │
    │ RENAME TABLE a TO b      │      │ ALTER TABLE a RENAME TO b│
    └──────────────────────────┘      └──────────────────────────┘

Examples:
    >>> from fluentdb.core.dialect import ColumnType, get_dialect
    >>> d = get_dialect("mysql")
    >>> d.placeholders(3)
    '?, ?, ?'
    >>> d.column_type(ColumnType.STRING, 100)
    'VARCHAR(100)'

Tags:
    dialect, sql, ddl, mysql, sqlite, fluentdb

Doc-Types:
    - API Reference
    - Architecture Documentation
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

DEFAULT_ENGINE = "InnoDB"
DEFAULT_CHARSET = "utf8mb4"
DEFAULT_STRING_LENGTH = 255


class ColumnType(str, Enum):
    """Closed set of column types a Blueprint can declare."""

    INCREMENTS = "increments"
    INTEGER = "integer"
    STRING = "string"
    TEXT = "text"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    BOOLEAN = "boolean"


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a **SQL fragment** (string) valid for the target
    engine.
    """

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'mysql'``)."""
        ...

    def placeholders(self, count: int) -> str:
        """Comma-separated placeholder list."""
        ...

    def quote_identifier(self, name: str) -> str:
        """Quote a table or column name."""
        ...

    def column_type(self, column_type: ColumnType, length: int | None = None) -> str:
        """DDL type expression for ``column_type``."""
        ...

    def table_options(self) -> str:
        """Trailing ``CREATE TABLE`` options, or ``''``."""
        ...

    def rename_table(self, source: str, target: str) -> str:
        """Full statement renaming ``source`` to ``target``."""
        ...

    def table_exists_query(self) -> str:
        """Query taking one placeholder (the table name) that returns rows
        if the table exists."""
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class MySQLDialect:
    """MySQL dialect: ``?`` placeholders, InnoDB / utf8mb4 tables.

    ``mysql.connector`` prepared cursors accept ``?`` markers, so compiled
    statements are sent to the server as real prepared statements.
    """

    @property
    def name(self) -> str:
        return "mysql"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    def quote_identifier(self, name: str) -> str:
        return "`" + name.replace("`", "``") + "`"

    def column_type(self, column_type: ColumnType, length: int | None = None) -> str:
        match column_type:
            case ColumnType.INCREMENTS:
                return "INT AUTO_INCREMENT PRIMARY KEY"
            case ColumnType.INTEGER:
                return "INT"
            case ColumnType.STRING:
                return f"VARCHAR({length or DEFAULT_STRING_LENGTH})"
            case ColumnType.TEXT:
                return "TEXT"
            case ColumnType.DATE:
                return "DATE"
            case ColumnType.DATETIME:
                return "DATETIME"
            case ColumnType.TIME:
                return "TIME"
            case ColumnType.BOOLEAN:
                return "TINYINT(1)"
        raise ValueError(f"Unsupported column type: {column_type!r}")

    def table_options(self) -> str:
        return f"ENGINE={DEFAULT_ENGINE} DEFAULT CHARSET={DEFAULT_CHARSET}"

    def rename_table(self, source: str, target: str) -> str:
        return f"RENAME TABLE {self.quote_identifier(source)} TO {self.quote_identifier(target)}"

    def table_exists_query(self) -> str:
        return (
            "SELECT TABLE_NAME FROM INFORMATION_SCHEMA.TABLES "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = ?"
        )


class SQLiteDialect(MySQLDialect):
    """SQLite dialect: MySQL text with SQLite's key, options and rename.

    SQLite accepts back-quoted identifiers and the MySQL type names
    (``VARCHAR(255)``, ``TINYINT(1)``, ``DATETIME``) with matching affinity.
    """

    @property
    def name(self) -> str:
        return "sqlite"

    def column_type(self, column_type: ColumnType, length: int | None = None) -> str:
        if column_type is ColumnType.INCREMENTS:
            return "INTEGER PRIMARY KEY AUTOINCREMENT"
        return super().column_type(column_type, length)

    def table_options(self) -> str:
        return ""

    def rename_table(self, source: str, target: str) -> str:
        return (
            f"ALTER TABLE {self.quote_identifier(source)} "
            f"RENAME TO {self.quote_identifier(target)}"
        )

    def table_exists_query(self) -> str:
        return "SELECT name FROM sqlite_master WHERE type='table' AND name = ?"


# =========================================================================
# Registry / Factory
# =========================================================================

# Pre-instantiated singletons (dialects are stateless)
_DIALECTS: dict[str, Dialect] = {
    "mysql": MySQLDialect(),
    "sqlite": SQLiteDialect(),
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Raises:
        ValueError: If ``db_type`` is not recognised.
    """
    key = db_type.lower() if isinstance(db_type, str) else db_type.value
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{db_type}'. Supported: {sorted(_DIALECTS)}"
        )
    return _DIALECTS[key]


__all__ = [
    "ColumnType",
    "DEFAULT_CHARSET",
    "DEFAULT_ENGINE",
    "DEFAULT_STRING_LENGTH",
    "Dialect",
    "MySQLDialect",
    "SQLiteDialect",
    "get_dialect",
]
