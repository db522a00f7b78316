"""Database adapters -- the live connection behind every query.

Manifesto:
    One adapter owns one engine handle. Builders, the schema façade, the
    migration runner and seeders receive an adapter explicitly; there is no
    process-wide connection singleton.

Architecture::

    DatabaseAdapter (base.py)        Abstract base: run/query/execute/table
        |-- MySQLAdapter             mysql.connector (production)
        |-- SQLiteAdapter            stdlib sqlite3 (development, tests)

    AdapterRegistry (registry.py)    Singleton: DatabaseType -> adapter factory
    DatabaseConfig (types.py)        Connection parameters
    DatabaseType (types.py)          Enum of supported backends

Guardrails:
    ❌ ``db.execute("SELECT * FROM t WHERE id=" + user_input)``
    ✅ ``db.table("t").where("id", user_input).first()``

Tags:
    fluentdb, database, adapters, registry-pattern, mysql, sqlite

Doc-Types:
    package-overview, module-index
"""

from fluentdb.core.dialect import Dialect, get_dialect
from fluentdb.core.protocols import Connection

from .base import DatabaseAdapter, StatementResult, returns_rows
from .registry import AdapterRegistry, adapter_registry, create_adapter, get_adapter
from .sqlite import SQLiteAdapter
from .types import DatabaseConfig, DatabaseType

__all__ = [
    # Types
    "DatabaseType",
    "DatabaseConfig",
    "StatementResult",
    # Protocols / Abstractions
    "Connection",
    "Dialect",
    "get_dialect",
    # Base class
    "DatabaseAdapter",
    "returns_rows",
    # Implementations
    "SQLiteAdapter",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
    "create_adapter",
]
