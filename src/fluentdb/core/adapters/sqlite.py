"""SQLite database adapter."""

from __future__ import annotations

import sqlite3
from typing import Any

from fluentdb.core.errors import DatabaseConnectionError
from fluentdb.core.logging import get_logger
from fluentdb.core.protocols import Connection

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter.

    Uses the built-in sqlite3 module. Suitable for:
    - Development and testing
    - Single-process tools
    """

    def __init__(
        self,
        path: str = ":memory:",
        *,
        timeout: float = 5.0,
        expose_errors: bool = False,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.SQLITE,
            path=path,
            options=kwargs,
        )
        super().__init__(config, expose_errors=expose_errors)
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Connect to SQLite database."""
        if self._conn is not None:
            return

        path = self._config.path or ":memory:"
        uri = path.startswith("file:")

        try:
            self._conn = sqlite3.connect(
                path,
                timeout=self._timeout,
                check_same_thread=False,
                uri=uri,
            )
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._connected = True
        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ) from e

        logger.debug("database.connected", target=self._config.describe())

    def disconnect(self) -> None:
        """Close SQLite connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            self._connected = False

    def get_connection(self) -> Connection:
        """Get the SQLite connection."""
        if not self._conn:
            self.connect()
        return self._conn

    def _driver_errors(self) -> tuple[type[BaseException], ...]:
        return (sqlite3.Error,)

    def _integrity_errors(self) -> tuple[type[BaseException], ...]:
        return (sqlite3.IntegrityError,)


__all__ = [
    "SQLiteAdapter",
]
