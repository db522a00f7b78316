"""Table blueprints: declarative column descriptions compiled to DDL.

A ``Blueprint`` is created in one of two modes that never change:

* **create**: column definitions are bare and comma-joined inside
  ``CREATE TABLE IF NOT EXISTS `t` (...)``;
* **alter**: every column definition is prefixed ``ADD COLUMN`` (or
  ``MODIFY COLUMN`` once ``change()`` was called on it) and followed by the
  table commands (``DROP COLUMN``, ``CHANGE COLUMN``) in one
  ``ALTER TABLE `t` ...`` statement.

Each column-adding call returns its :class:`ColumnDefinition`, and
modifiers act on that handle::

    def users(table: Blueprint) -> None:
        table.id()
        table.string("email", 150).unique()
        table.string("nickname").nullable()
        table.boolean("active").default(1)
        table.timestamps()

The blueprint-level ``nullable()``, ``default()``, ``unique()`` and
``change()`` shortcuts decorate the most recently added column.
"""

from __future__ import annotations

from typing import Any

from fluentdb.core.dialect import DEFAULT_STRING_LENGTH, ColumnType, Dialect, get_dialect
from fluentdb.core.errors import SchemaError

_AUDIT_COLUMNS = ("created_at", "created_by", "updated_at", "updated_by")
_SOFT_DELETE_COLUMNS = ("deleted_at", "deleted_by")


def sql_literal(value: Any) -> str:
    """Render a Python value as a DDL ``DEFAULT`` literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int | float):
        return str(value)
    text = str(value).replace("'", "''")
    return f"'{text}'"


class ColumnDefinition:
    """One column in a blueprint: name, type and modifiers in call order."""

    def __init__(
        self,
        name: str,
        column_type: ColumnType,
        *,
        length: int | None = None,
        alter: bool = False,
    ) -> None:
        if not name or not name.strip():
            raise SchemaError("Column name cannot be empty")
        self.name = name
        self.column_type = column_type
        self.length = length
        self._alter = alter
        self._modifiers: list[str] = []
        self._changed = False

    @property
    def modifiers(self) -> list[str]:
        return list(self._modifiers)

    @property
    def changed(self) -> bool:
        """True when this column modifies an existing one (alter mode)."""
        return self._changed

    def nullable(self) -> ColumnDefinition:
        self._modifiers.append("NULL")
        return self

    def default(self, value: Any) -> ColumnDefinition:
        self._modifiers.append(f"DEFAULT {sql_literal(value)}")
        return self

    def unique(self) -> ColumnDefinition:
        self._modifiers.append("UNIQUE")
        return self

    def change(self) -> ColumnDefinition:
        """Modify the existing column instead of adding it (no-op when creating)."""
        if self._alter:
            self._changed = True
        return self

    def definition(self, dialect: Dialect) -> str:
        """``<quoted name> <type> <modifiers...>``"""
        parts = [
            dialect.quote_identifier(self.name),
            dialect.column_type(self.column_type, self.length),
            *self._modifiers,
        ]
        return " ".join(parts)

    def render(self, dialect: Dialect) -> str:
        """The fragment as it appears in the compiled statement."""
        definition = self.definition(dialect)
        if not self._alter:
            return definition
        if self._changed:
            return f"MODIFY COLUMN {definition}"
        return f"ADD COLUMN {definition}"

    def __repr__(self) -> str:
        return f"ColumnDefinition({self.name!r}, {self.column_type.value})"


class Blueprint:
    """Per-table accumulator of columns and table commands."""

    def __init__(self, table: str, *, create: bool = False, dialect: Dialect | None = None):
        if not table or not table.strip():
            raise SchemaError("A blueprint needs a table name")
        self.table = table
        self._create = create
        self._dialect = dialect or get_dialect("mysql")
        self._columns: list[ColumnDefinition] = []
        self._commands: list[str] = []

    @property
    def is_create(self) -> bool:
        return self._create

    @property
    def columns(self) -> list[ColumnDefinition]:
        return list(self._columns)

    @property
    def commands(self) -> list[str]:
        return list(self._commands)

    # --- 1. Column definitions ---------------------------------------------

    def add_column(
        self, name: str, column_type: ColumnType, *, length: int | None = None
    ) -> ColumnDefinition:
        column = ColumnDefinition(name, column_type, length=length, alter=not self._create)
        self._columns.append(column)
        return column

    def id(self) -> ColumnDefinition:
        return self.increments("id")

    def increments(self, name: str) -> ColumnDefinition:
        return self.add_column(name, ColumnType.INCREMENTS)

    def integer(self, name: str) -> ColumnDefinition:
        return self.add_column(name, ColumnType.INTEGER)

    def string(self, name: str, length: int = DEFAULT_STRING_LENGTH) -> ColumnDefinition:
        return self.add_column(name, ColumnType.STRING, length=length)

    def text(self, name: str) -> ColumnDefinition:
        return self.add_column(name, ColumnType.TEXT)

    def date(self, name: str) -> ColumnDefinition:
        return self.add_column(name, ColumnType.DATE)

    def datetime(self, name: str) -> ColumnDefinition:
        return self.add_column(name, ColumnType.DATETIME)

    def time(self, name: str) -> ColumnDefinition:
        return self.add_column(name, ColumnType.TIME)

    def boolean(self, name: str) -> ColumnDefinition:
        return self.add_column(name, ColumnType.BOOLEAN)

    def timestamps(self) -> list[ColumnDefinition]:
        """``created_at``, ``created_by``, ``updated_at``, ``updated_by`` (INT, default 0)."""
        return [self.integer(name).default(0) for name in _AUDIT_COLUMNS]

    def soft_delete(self) -> list[ColumnDefinition]:
        """``deleted_at``, ``deleted_by`` (INT, default 0)."""
        return [self.integer(name).default(0) for name in _SOFT_DELETE_COLUMNS]

    # --- 2. Modifiers on the last column -----------------------------------

    def nullable(self) -> Blueprint:
        self._last("nullable").nullable()
        return self

    def default(self, value: Any) -> Blueprint:
        self._last("default").default(value)
        return self

    def unique(self) -> Blueprint:
        self._last("unique").unique()
        return self

    def change(self) -> Blueprint:
        self._last("change").change()
        return self

    def _last(self, modifier: str) -> ColumnDefinition:
        if not self._columns:
            raise SchemaError(
                f"{modifier}() needs a column to decorate; add one first",
                table=self.table,
            )
        return self._columns[-1]

    # --- 3. Table commands -------------------------------------------------

    def drop_column(self, name: str) -> Blueprint:
        self._commands.append(f"DROP COLUMN {self._dialect.quote_identifier(name)}")
        return self

    def rename_column(self, source: str, target: str, definition: str) -> Blueprint:
        """Rename a column.

        ``definition`` is the full column type (e.g. ``"VARCHAR(255) NOT NULL"``);
        ``CHANGE COLUMN`` requires it on MySQL 5.7 and 8.0 alike.
        """
        quote = self._dialect.quote_identifier
        self._commands.append(f"CHANGE COLUMN {quote(source)} {quote(target)} {definition}")
        return self

    # --- 4. SQL generation -------------------------------------------------

    def fragments(self) -> list[str]:
        """Rendered column fragments followed by table commands."""
        return [column.render(self._dialect) for column in self._columns] + self._commands

    def build(self) -> str | None:
        """Compile to one statement; ``None`` for an alter with nothing to do."""
        if self._create:
            return self._build_create()
        return self._build_alter()

    def _build_create(self) -> str:
        if not self._columns:
            raise SchemaError("Cannot create a table without columns", table=self.table)
        columns = ", ".join(column.render(self._dialect) for column in self._columns)
        statement = f"CREATE TABLE IF NOT EXISTS {self._dialect.quote_identifier(self.table)} ({columns})"
        options = self._dialect.table_options()
        if options:
            statement += f" {options}"
        return statement + ";"

    def _build_alter(self) -> str | None:
        instructions = self.fragments()
        if not instructions:
            return None
        return f"ALTER TABLE {self._dialect.quote_identifier(self.table)} {', '.join(instructions)};"

    def __repr__(self) -> str:
        mode = "create" if self._create else "alter"
        return f"Blueprint({self.table!r}, mode={mode}, columns={len(self._columns)}, commands={len(self._commands)})"


__all__ = [
    "Blueprint",
    "ColumnDefinition",
    "sql_literal",
]
