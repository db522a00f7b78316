"""Fluent query builder.

A ``QueryBuilder`` accumulates one query's configuration (select list,
joins, predicates, ordering, pagination) and compiles it into a single SQL
string plus an ordered parameter list when a terminal method runs.

Obtain builders from the adapter, never share them::

    rows = (
        db.table("users")
        .select(["users.id", "users.email", "roles.name AS role"])
        .left_join("user_roles", "user_roles.user_id = users.id")
        .left_join("roles", "roles.id = user_roles.role_id")
        .where("users.active", 1)
        .where("users.created_at", ">=", since)
        .order_by("users.id", "DESC")
        .limit(20)
        .get()
    )

Predicates are AND-joined. There is no OR combinator and no grouping;
use ``where_raw`` for anything the three ``where`` shapes cannot express.
Join conditions and single-argument ``where`` fragments are trusted SQL
and are inserted verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from fluentdb.core.errors import MalformedQueryError
from fluentdb.core.logging import get_logger

if TYPE_CHECKING:
    from fluentdb.core.adapters.base import DatabaseAdapter

logger = get_logger(__name__)

_MISSING: Any = object()

_DIRECTIONS = ("ASC", "DESC")


class QueryBuilder:
    """Stateful compiler for one query against one table."""

    def __init__(self, db: DatabaseAdapter, table: str):
        if not table or not table.strip():
            raise MalformedQueryError("A query needs a table name")
        self._db = db
        self._table = table
        self.reset()

    @property
    def table(self) -> str:
        return self._table

    @property
    def params(self) -> list[Any]:
        """Bound parameters accumulated so far, in placeholder order."""
        return list(self._params)

    def reset(self) -> QueryBuilder:
        """Clear every accumulated clause; the table binding is kept."""
        self._select = "*"
        self._joins: list[str] = []
        self._wheres: list[str] = []
        self._params: list[Any] = []
        self._order_by: str | None = None
        self._limit: int | None = None
        self._offset: int | None = None
        return self

    # --- 1. Select ---------------------------------------------------------

    def select(self, columns: str | Iterable[str] = "*") -> QueryBuilder:
        """Replace the select list."""
        if isinstance(columns, str):
            self._select = columns
        else:
            self._select = ", ".join(columns)
        if not self._select.strip():
            raise MalformedQueryError("Select list cannot be empty", table=self._table)
        return self

    # --- 2. Joins ----------------------------------------------------------

    def join(self, table: str, condition: str, kind: str = "INNER") -> QueryBuilder:
        self._joins.append(f"{kind.upper()} JOIN {table} ON {condition}")
        return self

    def left_join(self, table: str, condition: str) -> QueryBuilder:
        return self.join(table, condition, "LEFT")

    def right_join(self, table: str, condition: str) -> QueryBuilder:
        return self.join(table, condition, "RIGHT")

    # --- 3. Predicates -----------------------------------------------------

    def where(self, column: str, operator: Any = _MISSING, value: Any = _MISSING) -> QueryBuilder:
        """Add one AND-joined predicate.

        * ``where("deleted_at = 0")`` appends the fragment verbatim.
        * ``where("email", email)`` compiles ``email = ?``.
        * ``where("age", ">=", 18)`` compiles ``age >= ?``.
        """
        if operator is _MISSING and value is _MISSING:
            self._wheres.append(column)
            return self

        if value is _MISSING:
            operator, value = "=", operator

        self._wheres.append(f"{column} {operator} ?")
        self._params.append(value)
        return self

    def where_raw(self, sql: str, params: Sequence[Any] = ()) -> QueryBuilder:
        """Add a raw predicate and its parameters, e.g. for OR logic."""
        if isinstance(params, str | bytes):
            raise MalformedQueryError(
                "where_raw() params must be a sequence of values, not a string",
                table=self._table,
            )
        self._wheres.append(sql)
        self._params.extend(params)
        return self

    # --- 4. Order & pagination --------------------------------------------

    def order_by(self, column: str, direction: str = "ASC") -> QueryBuilder:
        direction = direction.upper()
        if direction not in _DIRECTIONS:
            raise MalformedQueryError(
                f"Sort direction must be ASC or DESC, got {direction!r}",
                table=self._table,
            )
        self._order_by = f"ORDER BY {column} {direction}"
        return self

    def limit(self, limit: int) -> QueryBuilder:
        self._limit = self._count("LIMIT", limit)
        return self

    def offset(self, offset: int) -> QueryBuilder:
        self._offset = self._count("OFFSET", offset)
        return self

    # --- 5. Execution (read) -----------------------------------------------

    def get(self) -> list[dict[str, Any]]:
        """Run the SELECT and return every matching row."""
        sql, params = self.to_sql()
        return self._db.query(sql, params)

    def first(self) -> dict[str, Any] | None:
        """Run the SELECT with ``LIMIT 1``; ``None`` when nothing matches."""
        sql = self._compile_select(limit=1)
        return self._db.query_one(sql, self._params)

    def exists(self) -> bool:
        sql = self._compile_select(select="COUNT(*) AS count", limit=1)
        row = self._db.query_one(sql, self._params)
        return bool(row) and int(row["count"]) > 0

    def to_sql(self) -> tuple[str, list[Any]]:
        """The SELECT statement and parameters ``get()`` would run."""
        return self._compile_select(), list(self._params)

    # --- 6. Execution (write) ----------------------------------------------

    def insert(self, data: Mapping[str, Any]) -> int | None:
        """Insert one row; returns the engine-assigned auto-increment id."""
        if not data:
            raise MalformedQueryError("Cannot insert an empty row", table=self._table)

        columns = ", ".join(data.keys())
        placeholders = self._db.dialect.placeholders(len(data))
        sql = f"INSERT INTO {self._table} ({columns}) VALUES ({placeholders})"

        return self._db.run(sql, list(data.values())).lastrowid

    def update(self, data: Mapping[str, Any]) -> bool:
        """Update matching rows.

        Without any ``where`` call this updates every row in the table.
        """
        if not data:
            raise MalformedQueryError("Cannot update with an empty row", table=self._table)

        assignments = ", ".join(f"{column} = ?" for column in data)
        sql = f"UPDATE {self._table} SET {assignments}"
        values = list(data.values())

        if self._wheres:
            sql += f" {self._compile_where()}"
            values.extend(self._params)
        else:
            self._warn_unscoped("update")

        self._db.run(sql, values)
        return True

    def delete(self) -> bool:
        """Delete matching rows.

        Without any ``where`` call this deletes every row in the table.
        """
        sql = f"DELETE FROM {self._table}"

        if self._wheres:
            sql += f" {self._compile_where()}"
        else:
            self._warn_unscoped("delete")

        self._db.run(sql, self._params)
        return True

    # --- Internal helpers ----------------------------------------------------

    def _compile_where(self) -> str:
        return "WHERE " + " AND ".join(self._wheres)

    def _compile_select(self, *, select: str | None = None, limit: int | None = None) -> str:
        parts = [f"SELECT {select or self._select} FROM {self._table}"]
        parts.extend(self._joins)

        if self._wheres:
            parts.append(self._compile_where())
        if self._order_by:
            parts.append(self._order_by)

        limit = self._limit if limit is None else limit
        if limit is not None:
            parts.append(f"LIMIT {limit}")
        if self._offset is not None:
            parts.append(f"OFFSET {self._offset}")

        return " ".join(parts)

    def _count(self, clause: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MalformedQueryError(
                f"{clause} must be a non-negative integer, got {value!r}",
                table=self._table,
            )
        return value

    def _warn_unscoped(self, operation: str) -> None:
        logger.warning("query.unscoped_write", operation=operation, table=self._table)

    def __repr__(self) -> str:
        return f"QueryBuilder(table={self._table!r}, wheres={len(self._wheres)}, params={len(self._params)})"


__all__ = [
    "QueryBuilder",
]
