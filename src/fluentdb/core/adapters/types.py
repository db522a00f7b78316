"""Database types and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fluentdb.core.dialect import DEFAULT_CHARSET
from fluentdb.core.errors import ConfigError


class DatabaseType(str, Enum):
    """Supported database types."""

    MYSQL = "mysql"
    SQLITE = "sqlite"


@dataclass
class DatabaseConfig:
    """
    Configuration for a database connection.

    Different fields are used by different database types.
    """

    db_type: DatabaseType = DatabaseType.MYSQL

    # SQLite
    path: str | None = None

    # MySQL
    host: str = "127.0.0.1"
    port: int = 3306
    database: str = ""
    username: str | None = None
    password: str | None = None
    charset: str = DEFAULT_CHARSET
    timezone: str = "UTC"

    connect_timeout: int = 10

    # Extra options (driver-specific)
    options: dict[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        """Connection target with the password masked, for logs and the CLI."""
        match self.db_type:
            case DatabaseType.SQLITE:
                return f"sqlite:///{self.path or ':memory:'}"
            case DatabaseType.MYSQL:
                user = self.username or ""
                secret = ":***" if self.password else ""
                return f"mysql://{user}{secret}@{self.host}:{self.port}/{self.database}"
            case _:
                raise ConfigError(f"Unsupported database type: {self.db_type}")


__all__ = [
    "DatabaseType",
    "DatabaseConfig",
]
