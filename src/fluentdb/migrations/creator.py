"""Generate timestamped migration modules."""

from __future__ import annotations

import keyword
import re
from datetime import datetime
from pathlib import Path

from fluentdb.core.errors import MigrationError

TIMESTAMP_FORMAT = "%Y_%m_%d_%H%M%S"

_TABLE_FROM_NAME = re.compile(r"^Create(?P<table>[A-Za-z0-9]+?)Tables?$")

TEMPLATE = '''"""{name} migration."""

from fluentdb.migrations import Migration
from fluentdb.schema import Blueprint, Schema


class {name}(Migration):
    def up(self, schema: Schema) -> None:
        def columns(table: Blueprint) -> None:
            table.id()

            # table.string("name")

            table.boolean("active").default(1)
            table.timestamps()  # created_at, created_by, updated_at, updated_by
            table.soft_delete()  # deleted_at, deleted_by

        schema.create("{table}", columns)

    def down(self, schema: Schema) -> None:
        schema.drop_if_exists("{table}")
'''


def table_name_for(name: str) -> str:
    """``CreateUserRolesTable`` → ``user_roles``; anything else → ``table_name``."""
    match = _TABLE_FROM_NAME.match(name)
    if match is None:
        return "table_name"
    return re.sub(r"(?<!^)(?=[A-Z])", "_", match.group("table")).lower()


def create_migration(name: str, directory: Path | str, now: datetime | None = None) -> Path:
    """Write ``<YYYY_MM_DD_HHMMSS>_<name>.py`` into ``directory``.

    Raises:
        MigrationError: ``name`` is not a usable class name or the file
            already exists.
    """
    if not name.isidentifier() or keyword.iskeyword(name):
        raise MigrationError(f"Migration name must be a Python identifier, got {name!r}")

    folder = Path(directory)
    folder.mkdir(parents=True, exist_ok=True)

    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    path = folder / f"{stamp}_{name}.py"
    if path.exists():
        raise MigrationError(f"{path.name} already exists", migration=path.name)

    path.write_text(TEMPLATE.format(name=name, table=table_name_for(name)), encoding="utf-8")
    return path


__all__ = [
    "TIMESTAMP_FORMAT",
    "create_migration",
    "table_name_for",
]
