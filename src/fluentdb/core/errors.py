"""
Structured error types for fluentdb.

Every failure raised by the data-access layer is a ``FluentDBError``
subclass carrying a category, a structured context (table, SQL text,
migration file) and the chained driver exception, so callers can decide
what to show and what to only log.

Manifesto:
    - **Typed hierarchy:** Connection, query, schema and migration failures
      are distinct types, never a bare ``Exception``
    - **Reject early:** Malformed statements (empty insert, bad LIMIT) are
      raised before anything reaches the engine
    - **Safe by default:** Engine messages are kept on the error for logs
      but are only exposed to callers in development mode
    - **Error chaining:** The driver exception is preserved as ``cause``

Architecture:
    ::

        FluentDBError
        ├── ConfigError
        ├── DatabaseError (DATABASE)
        │   ├── DatabaseConnectionError
        │   └── QueryError
        │       └── IntegrityError
        ├── ValidationError (VALIDATION)
        │   ├── MalformedQueryError
        │   └── SchemaError
        └── MigrationError (MIGRATION)

Examples:
    >>> error = MalformedQueryError("Cannot insert an empty row", table="users")
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>
    >>> error.context.table
    'users'

Tags:
    error-handling, exception-hierarchy, error-context, fluentdb

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    DATABASE = "DATABASE"  # Connection, engine-reported failures
    VALIDATION = "VALIDATION"  # Malformed statements, bad blueprints
    CONFIG = "CONFIG"  # Missing driver, invalid settings
    MIGRATION = "MIGRATION"  # Migration discovery / up / down failures
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to an error for logging.

    Attributes:
        table: Table the failing statement targeted
        sql: Statement text (never the bound values)
        migration: Migration or seeder filename
        metadata: Additional key-value pairs
    """

    table: str | None = None
    sql: str | None = None
    migration: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["table", "sql", "migration"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FluentDBError(Exception):
    """Base exception for all fluentdb errors.

    Subclasses set ``default_category``; callers may pass ``table=``,
    ``sql=`` or ``migration=`` as shortcuts for the matching
    :class:`ErrorContext` fields.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        table: str | None = None,
        sql: str | None = None,
        migration: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        if table is not None:
            self.context.table = table
        if sql is not None:
            self.context.sql = sql
        if migration is not None:
            self.context.migration = migration
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FluentDBError:
        """Add context to this error (fluent API).

        Usage:
            raise SchemaError("Empty table").with_context(table="users")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(FluentDBError):
    """Configuration error (unknown driver, missing dependency)."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(FluentDBError):
    """Database-related error."""

    default_category = ErrorCategory.DATABASE


class DatabaseConnectionError(DatabaseError):
    """The engine could not be reached or refused the credentials.

    Fatal for the current process or request.
    """


class QueryError(DatabaseError):
    """The engine rejected or failed a statement.

    ``message`` is what callers may show; ``engine_message`` is the raw
    driver text and is only meant for internal logs.
    """

    GENERIC_MESSAGE = "Database query failed"

    def __init__(
        self,
        message: str,
        *,
        engine_message: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.engine_message = engine_message if engine_message is not None else message

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["engine_message"] = self.engine_message
        return result


class IntegrityError(QueryError):
    """Constraint violation (unique, foreign key, not-null)."""


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(FluentDBError):
    """Caller error detected before any statement was executed."""

    default_category = ErrorCategory.VALIDATION


class MalformedQueryError(ValidationError):
    """The builder state cannot be compiled into a valid statement."""


class SchemaError(ValidationError):
    """The blueprint description cannot be compiled into valid DDL."""


# =============================================================================
# MIGRATION ERRORS
# =============================================================================


class MigrationError(FluentDBError):
    """Migration or seeder discovery, loading or execution failure."""

    default_category = ErrorCategory.MIGRATION


# =============================================================================
# UTILITIES
# =============================================================================


def public_message(error: Exception, *, expose: bool = False) -> str:
    """Return the text that may be shown outside the process.

    Engine messages leak table names and SQL fragments, so they are only
    returned when ``expose`` is set (development mode).
    """
    if isinstance(error, QueryError):
        return error.engine_message if expose else QueryError.GENERIC_MESSAGE
    if isinstance(error, FluentDBError):
        return error.message
    return str(error) if expose else "Internal error"


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FluentDBError",
    "ConfigError",
    "DatabaseError",
    "DatabaseConnectionError",
    "QueryError",
    "IntegrityError",
    "ValidationError",
    "MalformedQueryError",
    "SchemaError",
    "MigrationError",
    "public_message",
]
