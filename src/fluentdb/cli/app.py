"""
Root Typer application for the fluentdb CLI.

    fluentdb migrate                # apply pending migrations
    fluentdb rollback               # reverse the last one
    fluentdb status                 # applied vs pending
    fluentdb make-migration CreatePostsTable
    fluentdb seed [AdminSeeder]
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from fluentdb.cli.utils import (
    connected,
    console,
    fail,
    print_errors,
    print_table,
    resolve_dir,
)
from fluentdb.core.errors import FluentDBError
from fluentdb.core.logging import configure_logging
from fluentdb.core.settings import AppSettings

app = Typer(
    name="fluentdb",
    help="fluentdb: migrations and seeders for a fluent MySQL data layer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

DatabaseOption = typer.Option(None, "--database", "-d", help="SQLite database path (overrides DB_* settings)")
MigrationsDirOption = typer.Option(None, "--migrations-dir", "-m", help="Migrations folder")
SeedsDirOption = typer.Option(None, "--seeds-dir", "-s", help="Seeds folder")


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("fluentdb")
        except PackageNotFoundError:
            from fluentdb import __version__ as v
        typer.echo(f"fluentdb {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """fluentdb CLI: manage schema migrations and seed data."""
    configure_logging(level=AppSettings().log_level, service="fluentdb-cli")


# ── Migrations ───────────────────────────────────────────────────────────


@app.command()
def migrate(
    database: str | None = DatabaseOption,
    migrations_dir: Path | None = MigrationsDirOption,
) -> None:
    """Apply pending migrations in filename order."""
    from fluentdb.migrations import MigrationRunner

    folder = resolve_dir(migrations_dir, AppSettings().migrations_dir)
    with connected(database) as db:
        try:
            result = MigrationRunner(db, folder).apply_pending()
        except FluentDBError as exc:
            fail(exc.message)

    if not result.applied and result.success:
        console.print("Nothing to migrate.")
        return
    for name in result.applied:
        console.print(f"Migrating: {name}... [green]DONE[/green]")
    if not result.success:
        print_errors(result.errors)
        raise typer.Exit(code=1)
    console.print("All done.")


@app.command()
def rollback(
    database: str | None = DatabaseOption,
    migrations_dir: Path | None = MigrationsDirOption,
) -> None:
    """Reverse the most recently applied migration."""
    from fluentdb.migrations import MigrationRunner

    folder = resolve_dir(migrations_dir, AppSettings().migrations_dir)
    with connected(database) as db:
        try:
            name = MigrationRunner(db, folder).rollback_last()
        except FluentDBError as exc:
            fail(exc.message)

    if name is None:
        console.print("Nothing to rollback.")
        return
    console.print(f"Rolled back: {name}... [green]DONE[/green]")


@app.command()
def status(
    database: str | None = DatabaseOption,
    migrations_dir: Path | None = MigrationsDirOption,
) -> None:
    """Show applied and pending migrations."""
    from fluentdb.migrations import MigrationRunner

    folder = resolve_dir(migrations_dir, AppSettings().migrations_dir)
    with connected(database) as db:
        try:
            runner = MigrationRunner(db, folder)
            applied = runner.get_applied()
            pending = runner.get_pending()
        except FluentDBError as exc:
            fail(exc.message)

    rows = [
        {"migration": record.migration, "status": "Applied", "applied_at": str(record.created_at or "")}
        for record in applied
    ]
    rows += [{"migration": name, "status": "Pending", "applied_at": ""} for name in pending]
    print_table(rows, title="Migrations")


@app.command("make-migration")
def make_migration(
    name: str = typer.Argument(..., help="Class name, e.g. CreateUsersTable"),
    migrations_dir: Path | None = MigrationsDirOption,
) -> None:
    """Create a timestamped migration file from the template."""
    from fluentdb.migrations import create_migration

    folder = resolve_dir(migrations_dir, AppSettings().migrations_dir)
    try:
        path = create_migration(name, folder)
    except FluentDBError as exc:
        fail(exc.message)
    console.print(f"Created Migration: {path}")


# ── Seeders ──────────────────────────────────────────────────────────────


@app.command()
def seed(
    target: str | None = typer.Argument(None, help="Run only this seeder"),
    database: str | None = DatabaseOption,
    seeds_dir: Path | None = SeedsDirOption,
) -> None:
    """Run seeders (all, or only TARGET)."""
    from fluentdb.seeding import run_seeders

    folder = resolve_dir(seeds_dir, AppSettings().seeds_dir)
    with connected(database) as db:
        try:
            result = run_seeders(db, folder, target)
        except FluentDBError as exc:
            fail(exc.message)

    for name in result.ran:
        console.print(f"Seeding: {name}... [green]DONE[/green]")
    for name in result.skipped:
        console.print(f"Seeding: {name}... [yellow]SKIPPED[/yellow] (class not found)")
    if not result.success:
        print_errors(result.errors)
        raise typer.Exit(code=1)
