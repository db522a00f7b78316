"""Database adapter base class.

Manifesto:
    The adapter is the only object that owns a live engine handle. Query
    builders, the schema façade, the migration runner and seeders all go
    through it, so statement execution, row mapping, error translation and
    logging live in exactly one place.

Features:
    - Abstract ``connect()``, ``disconnect()``, ``get_connection()``
    - ``run()``: execute one statement, return rows / rowcount / last id
    - ``query()`` / ``query_one()``: row-returning helpers
    - ``execute()``: raw path that classifies row-returning statements by their leading keyword
    - ``table()``: fresh :class:`~fluentdb.query.builder.QueryBuilder` per call
    - Driver errors translated into :class:`QueryError` / :class:`IntegrityError`
    - Context-manager protocol for connection lifecycle

Tags:
    fluentdb, database, abstract-base, adapter-pattern

Doc-Types:
    api-reference
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from fluentdb.core.dialect import Dialect, get_dialect
from fluentdb.core.errors import IntegrityError, QueryError
from fluentdb.core.logging import get_logger
from fluentdb.core.protocols import Connection

from .types import DatabaseConfig, DatabaseType

if TYPE_CHECKING:
    from fluentdb.query.builder import QueryBuilder

logger = get_logger(__name__)

_ROW_RETURNING = frozenset({"SELECT", "WITH", "VALUES", "SHOW", "DESCRIBE", "DESC", "EXPLAIN", "PRAGMA"})


def returns_rows(sql: str) -> bool:
    """True when the statement's leading keyword produces a result set (case-insensitive)."""
    stripped = sql.lstrip(" \t\r\n(")
    keyword = stripped.split(None, 1)[0].upper() if stripped else ""
    return keyword in _ROW_RETURNING


@dataclass
class StatementResult:
    """Outcome of one executed statement."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1
    lastrowid: int | None = None


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Subclasses provide the driver-specific connect/cursor/error hooks;
    everything else is shared.
    """

    def __init__(self, config: DatabaseConfig, *, expose_errors: bool = False):
        self._config = config
        self._connected = False
        self._dialect: Dialect = get_dialect(config.db_type.value)
        self._expose_errors = expose_errors

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's database type."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        """Database type."""
        return self._config.db_type

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        """Whether adapter is connected."""
        return self._connected

    @property
    def expose_errors(self) -> bool:
        """Whether engine messages are surfaced on raised errors."""
        return self._expose_errors

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    @abstractmethod
    def get_connection(self) -> Connection:
        """Return the live handle, connecting on first use."""
        ...

    # -- driver hooks ------------------------------------------------------

    def _cursor(self, conn: Connection, params: Sequence[Any]) -> Any:
        """Open a cursor suitable for ``params``."""
        return conn.cursor()

    @abstractmethod
    def _driver_errors(self) -> tuple[type[BaseException], ...]:
        """Driver exception classes that signal an engine-reported failure."""
        ...

    @abstractmethod
    def _integrity_errors(self) -> tuple[type[BaseException], ...]:
        """Driver exception classes that signal a constraint violation."""
        ...

    # -- execution ---------------------------------------------------------

    def run(self, sql: str, params: Sequence[Any] = ()) -> StatementResult:
        """Execute one statement and commit.

        Rows are mapped to ``dict`` (column name → value) whenever the
        statement produced a result set.
        """
        conn = self.get_connection()
        params = tuple(params)
        started = time.perf_counter()
        cursor = self._cursor(conn, params)
        try:
            cursor.execute(sql, params)
            rows: list[dict[str, Any]] = []
            if cursor.description:
                columns = [desc[0] for desc in cursor.description]
                rows = [dict(zip(columns, row, strict=False)) for row in cursor.fetchall()]
            result = StatementResult(
                rows=rows,
                rowcount=cursor.rowcount,
                lastrowid=cursor.lastrowid,
            )
            conn.commit()
        except self._driver_errors() as exc:
            conn.rollback()
            raise self._translate_error(exc, sql) from exc
        finally:
            cursor.close()

        logger.debug(
            "query.executed",
            sql=sql,
            params=len(params),
            rows=len(result.rows),
            rowcount=result.rowcount,
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        return result

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Execute query and return results as dicts."""
        return self.run(sql, params).rows

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> dict[str, Any] | None:
        """Execute query and return single result."""
        results = self.query(sql, params)
        return results[0] if results else None

    def execute(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]] | bool:
        """Raw statement path.

        Returns the row list for row-returning statements (SELECT, WITH,
        SHOW, DESCRIBE, EXPLAIN, PRAGMA, ...) and ``True`` for
        everything else. Engine failures raise :class:`QueryError`.
        """
        result = self.run(sql, params)
        if returns_rows(sql):
            return result.rows
        return True

    def table(self, name: str) -> QueryBuilder:
        """Start a new query against ``name``.

        Every call returns a fresh builder; builders are never shared
        between logical queries.
        """
        from fluentdb.query.builder import QueryBuilder

        return QueryBuilder(self, name)

    def _translate_error(self, exc: BaseException, sql: str) -> QueryError:
        engine_message = str(exc)
        error_cls = IntegrityError if isinstance(exc, self._integrity_errors()) else QueryError
        logger.error(
            "query.failed",
            sql=sql,
            error_type=error_cls.__name__,
            engine_message=engine_message,
        )
        message = engine_message if self._expose_errors else QueryError.GENERIC_MESSAGE
        return error_cls(
            message,
            engine_message=engine_message,
            sql=sql,
            cause=exc if isinstance(exc, Exception) else None,
        )

    def __enter__(self) -> DatabaseAdapter:
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()


__all__ = [
    "DatabaseAdapter",
    "StatementResult",
    "returns_rows",
]
