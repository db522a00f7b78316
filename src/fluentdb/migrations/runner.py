"""Migration runner.

Discovers ``<YYYY_MM_DD_HHMMSS>_<Name>.py`` files in the migrations
directory, tracks applied ones in the ``migrations`` ledger table, and
applies pending ones in filename order.

Each file is applied and then recorded; there is no transaction spanning
files. The first failure stops the run, leaving earlier files applied and
recorded and the failing file unrecorded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fluentdb.core.errors import MigrationError
from fluentdb.core.logging import LogContext, get_logger
from fluentdb.schema import Blueprint, Schema

from .loader import load_class
from .migration import Migration

if TYPE_CHECKING:
    from fluentdb.core.adapters.base import DatabaseAdapter

logger = get_logger(__name__)

LEDGER_TABLE = "migrations"

MIGRATION_FILE_PATTERN = re.compile(r"^\d{4}_\d{2}_\d{2}_\d{6}_[A-Za-z_][A-Za-z0-9_]*\.py$")


@dataclass
class MigrationRecord:
    """Record of a single applied migration."""

    id: int
    migration: str
    created_at: Any = None


@dataclass
class MigrationResult:
    """Result of a migration run."""

    applied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


class MigrationRunner:
    """Applies Python migrations from a directory.

    Parameters
    ----------
    db
        The adapter every migration runs against.
    migrations_dir
        Directory containing timestamped migration modules.

    Example::

        from fluentdb.core.adapters import create_adapter
        from fluentdb.migrations import MigrationRunner

        runner = MigrationRunner(create_adapter(), "database/migrations")
        result = runner.apply_pending()
        print(f"Applied {len(result.applied)} migrations")
    """

    def __init__(self, db: DatabaseAdapter, migrations_dir: Path | str) -> None:
        self._db = db
        self._schema = Schema(db)
        self._migrations_dir = Path(migrations_dir)
        self._ensure_ledger()

    @property
    def migrations_dir(self) -> Path:
        return self._migrations_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply_pending(self) -> MigrationResult:
        """Apply all pending migrations in filename order.

        Returns ``MigrationResult`` with lists of applied, skipped, and
        errored migrations.
        """
        result = MigrationResult()
        applied = {r.migration for r in self.get_applied()}

        for path in self._discover_migrations():
            name = path.name
            if name in applied:
                result.skipped.append(name)
                continue

            with LogContext(migration=name):
                try:
                    migration = self._load(path)
                    migration.up(self._schema)
                    self._record_migration(name)
                    result.applied.append(name)
                    logger.info("migration.applied")
                except Exception as exc:
                    result.errors[name] = str(exc)
                    logger.error("migration.failed", error=str(exc))
                    break  # Stop on first error

        return result

    def get_applied(self) -> list[MigrationRecord]:
        """Return list of already-applied migrations, oldest first."""
        rows = (
            self._db.table(LEDGER_TABLE)
            .select(["id", "migration", "created_at"])
            .order_by("id")
            .get()
        )
        return [
            MigrationRecord(id=row["id"], migration=row["migration"], created_at=row["created_at"])
            for row in rows
        ]

    def get_pending(self) -> list[str]:
        """Return filenames of migrations not yet applied."""
        applied = {r.migration for r in self.get_applied()}
        return [
            path.name
            for path in self._discover_migrations()
            if path.name not in applied
        ]

    def rollback_last(self) -> str | None:
        """Reverse the most recently applied migration.

        Runs the migration's ``down`` and then deletes its ledger row.
        Returns the filename, or ``None`` when nothing has been applied.

        Raises:
            MigrationError: The recorded file no longer exists or cannot
                be loaded.
        """
        records = self.get_applied()
        if not records:
            return None

        last = records[-1]
        path = self._migrations_dir / last.migration
        if not path.is_file():
            raise MigrationError(
                f"Migration file '{last.migration}' not found. Cannot rollback.",
                migration=last.migration,
            )

        try:
            self._load(path).down(self._schema)
        except Exception as exc:
            logger.error("migration.failed", migration=last.migration, error=str(exc), direction="down")
            raise

        self._db.table(LEDGER_TABLE).where("id", last.id).delete()
        logger.info("migration.rolled_back", migration=last.migration)
        return last.migration

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_ledger(self) -> None:
        """Create the ``migrations`` table if it doesn't exist."""

        def ledger(table: Blueprint) -> None:
            table.id()
            table.string("migration")
            table.datetime("created_at").nullable()

        self._schema.create(LEDGER_TABLE, ledger)

    def _discover_migrations(self) -> list[Path]:
        """Return migration files in the directory, sorted by filename."""
        if not self._migrations_dir.is_dir():
            return []
        return sorted(
            (path for path in self._migrations_dir.iterdir() if MIGRATION_FILE_PATTERN.match(path.name)),
            key=lambda path: path.name,
        )

    def _load(self, path: Path) -> Migration:
        return load_class(path, Migration)()

    def _record_migration(self, filename: str) -> None:
        """Insert a row into the ledger."""
        self._db.table(LEDGER_TABLE).insert(
            {
                "migration": filename,
                "created_at": datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S"),
            }
        )


__all__ = [
    "LEDGER_TABLE",
    "MIGRATION_FILE_PATTERN",
    "MigrationRecord",
    "MigrationResult",
    "MigrationRunner",
]
