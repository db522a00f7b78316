"""Schema façade: the entry point migrations use to change tables.

    schema = Schema(db)
    schema.create("users", lambda table: (table.id(), table.string("email").unique()))
    schema.table("users", lambda table: table.drop_column("legacy_flag"))
    schema.rename("users", "accounts")
    schema.drop_if_exists("accounts")

The façade holds no state beyond the adapter. ``create`` and ``table``
hand a fresh :class:`Blueprint` to the callback, compile it and execute
the statement when there is one.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from fluentdb.core.logging import get_logger

from .blueprint import Blueprint

if TYPE_CHECKING:
    from fluentdb.core.adapters.base import DatabaseAdapter

logger = get_logger(__name__)

BlueprintCallback = Callable[[Blueprint], Any]


class Schema:
    """DDL operations against one adapter."""

    def __init__(self, db: DatabaseAdapter):
        self._db = db

    @property
    def db(self) -> DatabaseAdapter:
        return self._db

    def blueprint(self, table: str, *, create: bool = False) -> Blueprint:
        """A blueprint bound to this adapter's dialect."""
        return Blueprint(table, create=create, dialect=self._db.dialect)

    def create(self, table: str, callback: BlueprintCallback) -> str | None:
        """Create ``table`` from the columns ``callback`` declares."""
        return self._apply(self.blueprint(table, create=True), callback)

    def table(self, table: str, callback: BlueprintCallback) -> str | None:
        """Alter ``table``; nothing is executed when the callback adds nothing."""
        return self._apply(self.blueprint(table), callback)

    alter_table = table

    def rename(self, source: str, target: str) -> str:
        sql = self._db.dialect.rename_table(source, target)
        self._db.execute(sql)
        return sql

    def drop(self, table: str) -> str:
        sql = f"DROP TABLE {self._db.dialect.quote_identifier(table)}"
        self._db.execute(sql)
        return sql

    def drop_if_exists(self, table: str) -> str:
        sql = f"DROP TABLE IF EXISTS {self._db.dialect.quote_identifier(table)}"
        self._db.execute(sql)
        return sql

    def has_table(self, table: str) -> bool:
        row = self._db.query_one(self._db.dialect.table_exists_query(), [table])
        return row is not None

    def _apply(self, blueprint: Blueprint, callback: BlueprintCallback) -> str | None:
        callback(blueprint)
        sql = blueprint.build()
        if sql is None:
            logger.debug("schema.noop", table=blueprint.table)
            return None
        self._db.execute(sql)
        return sql


__all__ = [
    "BlueprintCallback",
    "Schema",
]
