"""Base class for migration modules.

A migration file is a Python module named ``<YYYY_MM_DD_HHMMSS>_<Name>.py``
that defines exactly one :class:`Migration` subclass::

    from fluentdb.migrations import Migration
    from fluentdb.schema import Blueprint, Schema


    class CreateUsersTable(Migration):
        def up(self, schema: Schema) -> None:
            def users(table: Blueprint) -> None:
                table.id()
                table.string("email").unique()
                table.timestamps()

            schema.create("users", users)

        def down(self, schema: Schema) -> None:
            schema.drop_if_exists("users")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fluentdb.schema.facade import Schema


class Migration(ABC):
    """One reversible schema change."""

    @abstractmethod
    def up(self, schema: Schema) -> None:
        """Apply the change."""
        ...

    @abstractmethod
    def down(self, schema: Schema) -> None:
        """Reverse what :meth:`up` did."""
        ...
