"""MySQL database adapter.

Uses ``mysql.connector`` from the ``mysql-connector-python`` package.
Statements that carry parameters run on a *prepared* cursor, which accepts
the ``?`` markers the builder compiles; parameterless statements (DDL,
``SET``) run on a plain cursor.

One adapter owns one connection. There is no pooling: long-lived
processes should ``disconnect()`` (or use the adapter as a context
manager) at request teardown.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import mysql.connector
from mysql.connector import errors as mysql_errors

from fluentdb.core.dialect import DEFAULT_CHARSET
from fluentdb.core.errors import ConfigError, DatabaseConnectionError
from fluentdb.core.logging import get_logger
from fluentdb.core.protocols import Connection

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)


def utc_offset(timezone: str, *, at: datetime | None = None) -> str:
    """Current UTC offset of an IANA zone as ``+HH:MM``.

    >>> utc_offset("Asia/Singapore")
    '+08:00'
    """
    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone: {timezone!r}", cause=exc) from exc
    moment = (at or datetime.now(zone)).astimezone(zone)
    raw = moment.strftime("%z")  # e.g. +0800
    return f"{raw[:3]}:{raw[3:]}"


class MySQLAdapter(DatabaseAdapter):
    """MySQL / MariaDB database adapter."""

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 3306,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        charset: str = DEFAULT_CHARSET,
        timezone: str = "UTC",
        expose_errors: bool = False,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.MYSQL,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            charset=charset,
            timezone=timezone,
            options=kwargs,
        )
        super().__init__(config, expose_errors=expose_errors)
        self._conn: Any = None

    def connect(self) -> None:
        """Connect to MySQL and pin the session time zone."""
        if self._conn is not None:
            return

        offset = utc_offset(self._config.timezone)
        try:
            self._conn = mysql.connector.connect(
                host=self._config.host,
                port=self._config.port,
                database=self._config.database,
                user=self._config.username,
                password=self._config.password,
                charset=self._config.charset,
                connection_timeout=self._config.connect_timeout,
                autocommit=False,
                **self._config.options,
            )
            cursor = self._conn.cursor()
            try:
                cursor.execute(f"SET time_zone = '{offset}'")
            finally:
                cursor.close()
            self._connected = True
        except mysql_errors.Error as e:
            if self._conn is not None:
                self._conn.close()
            self._conn = None
            raise DatabaseConnectionError(
                f"Failed to connect to MySQL: {e}",
                cause=e,
            ) from e

        logger.debug(
            "database.connected",
            target=self._config.describe(),
            time_zone=offset,
        )

    def disconnect(self) -> None:
        """Close the MySQL connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        self._connected = False

    def get_connection(self) -> Connection:
        """Get the MySQL connection."""
        if self._conn is None:
            self.connect()
        return self._conn

    def _cursor(self, conn: Connection, params: Sequence[Any]) -> Any:
        if params:
            return conn.cursor(prepared=True)
        return conn.cursor()

    def _driver_errors(self) -> tuple[type[BaseException], ...]:
        return (mysql_errors.Error,)

    def _integrity_errors(self) -> tuple[type[BaseException], ...]:
        return (mysql_errors.IntegrityError,)


__all__ = [
    "MySQLAdapter",
    "utc_offset",
]
