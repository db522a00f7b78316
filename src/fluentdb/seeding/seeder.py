"""Database seeders.

A seeder file ``<Name>.py`` in the seeds directory defines a class
``<Name>`` deriving from :class:`Seeder`::

    class RoleSeeder(Seeder):
        def run(self, db: DatabaseAdapter) -> None:
            if db.table("roles").where("name", "admin").first() is None:
                db.table("roles").insert({"name": "admin"})

Seeders are expected to be idempotent: look before inserting.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from fluentdb.core.errors import MigrationError
from fluentdb.core.logging import get_logger
from fluentdb.migrations.loader import load_module

if TYPE_CHECKING:
    from fluentdb.core.adapters.base import DatabaseAdapter

logger = get_logger(__name__)


class Seeder(ABC):
    """Populates tables with baseline data."""

    @abstractmethod
    def run(self, db: DatabaseAdapter) -> None:
        ...


@dataclass
class SeedResult:
    """Result of a seeding run."""

    ran: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


def discover_seeders(seeds_dir: Path | str) -> list[Path]:
    """Seeder files in ``seeds_dir``, sorted by name."""
    folder = Path(seeds_dir)
    if not folder.is_dir():
        return []
    return sorted(path for path in folder.glob("*.py") if not path.name.startswith("_"))


def run_seeders(
    db: DatabaseAdapter,
    seeds_dir: Path | str,
    target: str | None = None,
) -> SeedResult:
    """Run every seeder (or only ``target``) against ``db``.

    A failing seeder is recorded and the run moves on to the next one.

    Raises:
        MigrationError: ``target`` names a seeder that does not exist.
    """
    result = SeedResult()
    files = discover_seeders(seeds_dir)

    if target is not None:
        files = [path for path in files if path.stem == target]
        if not files:
            raise MigrationError(f"Seeder '{target}' not found in {seeds_dir}")

    for path in files:
        name = path.stem
        try:
            module = load_module(path)
        except MigrationError as exc:
            result.errors[name] = exc.message
            logger.error("seed.failed", seeder=name, error=exc.message)
            continue

        seeder_cls = getattr(module, name, None)
        if not (inspect.isclass(seeder_cls) and issubclass(seeder_cls, Seeder)):
            result.skipped.append(name)
            logger.warning("seed.skipped", seeder=name, reason="class not found")
            continue

        try:
            seeder_cls().run(db)
            result.ran.append(name)
            logger.info("seed.completed", seeder=name)
        except Exception as exc:
            result.errors[name] = str(exc)
            logger.error("seed.failed", seeder=name, error=str(exc))

    return result


__all__ = [
    "SeedResult",
    "Seeder",
    "discover_seeders",
    "run_seeders",
]
