"""Database adapter registry and factory.

Manifesto:
    Consumers should never hard-code adapter class names. The registry maps
    ``DatabaseType`` strings to adapter classes; ``create_adapter()`` builds
    the configured adapter straight from :class:`DatabaseSettings`.

Features:
    - ``AdapterRegistry`` singleton with pre-registered defaults
    - ``get_adapter()`` factory: type + kwargs → adapter
    - ``create_adapter()`` factory: settings → adapter

Tags:
    fluentdb, database, registry, factory

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any

from fluentdb.core.errors import ConfigError
from fluentdb.core.settings import AppSettings, DatabaseSettings

from .base import DatabaseAdapter
from .types import DatabaseType


def _mysql_adapter(**kwargs: Any) -> DatabaseAdapter:
    # Deferred so the SQLite path never imports the MySQL driver.
    from .mysql import MySQLAdapter

    return MySQLAdapter(**kwargs)


def _sqlite_adapter(**kwargs: Any) -> DatabaseAdapter:
    from .sqlite import SQLiteAdapter

    return SQLiteAdapter(**kwargs)


class AdapterRegistry:
    """
    Registry for database adapter factories.

    Pre-registered adapters:
    - ``mysql`` / ``mariadb``: :class:`MySQLAdapter`
    - ``sqlite``: :class:`SQLiteAdapter`
    """

    def __init__(self):
        self._factories: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self._factories["mysql"] = _mysql_adapter
        self._factories["mariadb"] = _mysql_adapter  # Alias
        self._factories["sqlite"] = _sqlite_adapter

    def create(self, name: str, **kwargs: Any) -> DatabaseAdapter:
        """Create an adapter by name."""
        name = name.lower()
        if name not in self._factories:
            raise ConfigError(f"Unknown database adapter: {name}")
        return self._factories[name](**kwargs)


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(
    db_type: DatabaseType | str,
    **kwargs: Any,
) -> DatabaseAdapter:
    """
    Get a database adapter by type.

    Usage:
        adapter = get_adapter(DatabaseType.SQLITE, path="data.db")
        adapter = get_adapter("mysql", host="localhost", database="app")
    """
    if isinstance(db_type, DatabaseType):
        name = db_type.value
    else:
        name = db_type

    return adapter_registry.create(name, **kwargs)


def create_adapter(
    settings: DatabaseSettings | None = None,
    app: AppSettings | None = None,
) -> DatabaseAdapter:
    """Build the adapter described by the environment.

    Engine messages are exposed on raised errors only when the application
    runs in development mode.
    """
    settings = settings or DatabaseSettings()
    app = app or AppSettings()

    if settings.driver == "sqlite":
        return get_adapter(
            DatabaseType.SQLITE,
            path=settings.path,
            expose_errors=app.is_development,
        )

    return get_adapter(
        DatabaseType.MYSQL,
        host=settings.host,
        port=settings.port,
        database=settings.name,
        username=settings.user,
        password=settings.password,
        charset=settings.charset,
        timezone=settings.timezone,
        expose_errors=app.is_development,
    )


__all__ = [
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
    "create_adapter",
]
