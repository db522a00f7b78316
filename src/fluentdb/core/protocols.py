"""
Protocol definitions for fluentdb.

Manifesto:
    Adapters depend on the *shape* of a DB-API 2.0 connection, not on a
    driver class. ``sqlite3.Connection`` and ``mysql.connector``
    connections both satisfy :class:`Connection` without any wrapper.

Tags:
    protocol, connection, dbapi, fluentdb

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """Minimal synchronous DB-API connection used by the adapters.

    ::

        cursor(...)  → Cursor with execute / fetchall / description
        commit()     → Commit current transaction
        rollback()   → Rollback current transaction
        close()      → Release the handle
    """

    def cursor(self, *args: Any, **kwargs: Any) -> Any:
        """Open a cursor. SYNC."""
        ...

    def commit(self) -> None:
        """Commit current transaction. SYNC."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction. SYNC."""
        ...

    def close(self) -> None:
        """Close the handle. SYNC."""
        ...


__all__ = [
    "Connection",
]
