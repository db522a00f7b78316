"""
CLI utility helpers: output formatting and connection management.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from fluentdb.core.adapters import DatabaseAdapter, SQLiteAdapter, create_adapter
from fluentdb.core.errors import DatabaseConnectionError
from fluentdb.core.settings import AppSettings

console = Console()
err_console = Console(stderr=True)


# ── Connection helper ────────────────────────────────────────────────────


def get_adapter(database: str | None = None, app: AppSettings | None = None) -> DatabaseAdapter:
    """Adapter from ``DB_*`` settings, or a SQLite file when ``database`` is given."""
    app = app or AppSettings()
    if database:
        return SQLiteAdapter(database, expose_errors=app.is_development)
    return create_adapter(app=app)


@contextmanager
def connected(database: str | None = None) -> Iterator[DatabaseAdapter]:
    """Open the adapter for one command; exit 1 when the engine is unreachable."""
    adapter = get_adapter(database)
    try:
        adapter.connect()
    except DatabaseConnectionError as exc:
        fail(f"DB Connection Failed: {exc.message}")
    try:
        yield adapter
    finally:
        adapter.disconnect()


def resolve_dir(value: Path | None, default: Path) -> Path:
    return value if value is not None else default


# ── Output helpers ───────────────────────────────────────────────────────


def fail(message: str) -> NoReturn:
    """Print an error and exit non-zero."""
    err_console.print(f"[bold red]Error[/bold red]: {message}")
    raise typer.Exit(code=1)


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in row.values()))
    console.print(table)


def print_errors(errors: dict[str, str]) -> None:
    for name, message in errors.items():
        err_console.print(f"[red]FAILED[/red] {name}: {message}")
