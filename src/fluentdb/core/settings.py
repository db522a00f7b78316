"""Environment-driven settings for fluentdb.

Connection parameters and application mode come from environment variables
(and an optional ``.env`` file), validated by pydantic at startup.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not at first query
    - **Environment-driven:** ``DB_*`` for the engine, ``APP_*`` for the app
    - **Sensible defaults:** A local MySQL ``test`` schema as ``root``

Features:
    - **DatabaseSettings:** driver, host, port, name, user, password, path,
      charset, timezone
    - **AppSettings:** name, env, debug, log level, migration/seed folders
    - **.env file support:** Automatic loading via pydantic-settings

Examples:
    >>> from fluentdb.core.settings import DatabaseSettings
    >>> DatabaseSettings(driver="sqlite", path=":memory:").driver
    'sqlite'

Tags:
    settings, configuration, pydantic, environment, fluentdb

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Engine connection settings (``DB_`` prefix).

    Fields
    ──────
    driver    : ``mysql`` (production) or ``sqlite`` (embedded/dev)
    host      : MySQL host
    port      : MySQL port
    name      : MySQL schema name
    user      : MySQL user
    password  : MySQL password (``DB_PASS`` or ``DB_PASSWORD``)
    path      : SQLite database file, ``:memory:`` for RAM
    charset   : Connection character set
    timezone  : IANA zone whose UTC offset the session is pinned to
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    driver: Literal["mysql", "sqlite"] = "mysql"

    # ── MySQL ────────────────────────────────────────────────────
    host: str = "127.0.0.1"
    port: int = 3306
    name: str = "test"
    user: str = "root"
    password: str = Field(
        default="",
        validation_alias=AliasChoices("DB_PASS", "DB_PASSWORD"),
    )
    charset: str = "utf8mb4"
    timezone: str = "UTC"

    # ── SQLite ───────────────────────────────────────────────────
    path: str = ":memory:"


class AppSettings(BaseSettings):
    """Application settings (``APP_`` prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = "Project Name"
    env: str = "production"
    debug: bool = False
    log_level: str = "INFO"

    migrations_dir: Path = Field(
        default=Path("database/migrations"),
        description="Folder holding <YYYY_MM_DD_HHMMSS>_<Name>.py migration files",
    )
    seeds_dir: Path = Field(
        default=Path("database/seeds"),
        description="Folder holding <Name>.py seeder files",
    )

    @field_validator("env")
    @classmethod
    def _normalise_env(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def is_development(self) -> bool:
        """Engine error messages are only exposed in development."""
        return self.env == "development"


__all__ = [
    "DatabaseSettings",
    "AppSettings",
]
