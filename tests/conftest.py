"""
Shared pytest fixtures for fluentdb tests.

This module provides:
- In-memory SQLite adapters (production-like and development-mode)
- A ``users`` table created through the schema façade
- Temporary migration and seed directories

Statements that only MySQL can parse are verified by compiling them, not
by executing them.
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Ensure fluentdb package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fluentdb.core.adapters import SQLiteAdapter
from fluentdb.schema import Blueprint, Schema


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Tests using a live adapter are integration tests; the rest are unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if markers.intersection({"unit", "integration"}):
            continue
        fixtures = set(getattr(item, "fixturenames", ()))
        if fixtures.intersection({"db", "dev_db", "users_db"}):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Adapter Fixtures
# =============================================================================


@pytest.fixture
def db() -> Generator[SQLiteAdapter, None, None]:
    """Connected in-memory SQLite adapter (engine messages hidden)."""
    adapter = SQLiteAdapter(":memory:")
    adapter.connect()
    yield adapter
    adapter.disconnect()


@pytest.fixture
def dev_db() -> Generator[SQLiteAdapter, None, None]:
    """Connected in-memory SQLite adapter in development mode."""
    adapter = SQLiteAdapter(":memory:", expose_errors=True)
    adapter.connect()
    yield adapter
    adapter.disconnect()


def create_users(table: Blueprint) -> None:
    table.id()
    table.string("email", 150).unique()
    table.string("name").nullable()
    table.string("status").default("new")
    table.integer("age").nullable()
    table.boolean("active").default(1)


@pytest.fixture
def users_db(db: SQLiteAdapter) -> SQLiteAdapter:
    """Adapter with an empty ``users`` table."""
    Schema(db).create("users", create_users)
    return db


# =============================================================================
# Directory Fixtures
# =============================================================================


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    d = tmp_path / "migrations"
    d.mkdir()
    return d


@pytest.fixture
def seeds_dir(tmp_path: Path) -> Path:
    d = tmp_path / "seeds"
    d.mkdir()
    return d
