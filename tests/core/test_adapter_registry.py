"""Tests for the adapter registry and factories."""

from __future__ import annotations

import pytest

from fluentdb.core.adapters import (
    AdapterRegistry,
    DatabaseAdapter,
    DatabaseType,
    SQLiteAdapter,
    adapter_registry,
    create_adapter,
    get_adapter,
)
from fluentdb.core.errors import ConfigError
from fluentdb.core.settings import AppSettings, DatabaseSettings


class TestAdapterRegistry:
    @pytest.mark.parametrize("name", ["mysql", "MariaDB", "sqlite"])
    def test_defaults_registered(self, name):
        assert isinstance(adapter_registry.create(name), DatabaseAdapter)

    def test_unknown_adapter(self):
        with pytest.raises(ConfigError, match="Unknown database adapter"):
            AdapterRegistry().create("oracle")


class TestGetAdapter:
    def test_by_enum(self):
        adapter = get_adapter(DatabaseType.SQLITE, path=":memory:")
        assert isinstance(adapter, SQLiteAdapter)

    def test_by_name(self):
        adapter = get_adapter("mysql", database="app")
        assert adapter.db_type is DatabaseType.MYSQL
        assert adapter.config.database == "app"

    def test_mariadb_alias(self):
        assert get_adapter("MariaDB").db_type is DatabaseType.MYSQL


class TestCreateAdapter:
    def test_sqlite_from_settings(self):
        adapter = create_adapter(
            DatabaseSettings(_env_file=None, driver="sqlite", path="app.db"),
            AppSettings(_env_file=None, env="production"),
        )
        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.config.path == "app.db"
        assert adapter.expose_errors is False

    def test_mysql_from_settings(self):
        adapter = create_adapter(
            DatabaseSettings(
                _env_file=None,
                driver="mysql",
                host="db",
                port=3307,
                name="app",
                user="svc",
                password="pw",
                timezone="Asia/Singapore",
            ),
            AppSettings(_env_file=None, env="development"),
        )
        cfg = adapter.config
        assert (cfg.host, cfg.port, cfg.database, cfg.username, cfg.password) == ("db", 3307, "app", "svc", "pw")
        assert cfg.timezone == "Asia/Singapore"
        assert adapter.expose_errors is True
