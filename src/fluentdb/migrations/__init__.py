"""Schema migrations.

Timestamped Python modules under a migrations directory, applied in
filename order and recorded in the ``migrations`` ledger table.
"""

from .creator import create_migration, table_name_for
from .migration import Migration
from .runner import (
    LEDGER_TABLE,
    MigrationRecord,
    MigrationResult,
    MigrationRunner,
)

__all__ = [
    "LEDGER_TABLE",
    "Migration",
    "MigrationRecord",
    "MigrationResult",
    "MigrationRunner",
    "create_migration",
    "table_name_for",
]
