"""Database lifecycle commands."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cli.utils import fail, get_components
from ledger import LedgerError

console = Console()


@click.group()
def db():
    """Ledger database initialization and health."""
    pass


@db.command("init")
@click.option("--path", "db_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Database file (defaults to paths.db_path from config)")
def db_init(db_path: Path | None):
    """Create the ledger schema. Fails if it already exists."""
    try:
        c = get_components()
        store = c["db"]
        if db_path is not None:
            store.open(db_path)
            c["db_path"] = db_path.expanduser()
        if store.is_initialized():
            console.print(f"[yellow]Already initialized:[/] {c['db_path']}")
            return
        store.initialize()
    except LedgerError as e:
        fail(e)
    except ValueError as e:
        fail(str(e))

    console.print(f"[green]Initialized[/] {c['db_path']}")


@db.command("status")
def db_status():
    """Show whether the ledger is initialized, with row counts."""
    try:
        c = get_components()
    except (LedgerError, ValueError) as e:
        fail(e if isinstance(e, LedgerError) else str(e))

    store = c["db"]
    if not store.is_initialized():
        console.print(f"[yellow]Not initialized:[/] {c['db_path']}")
        console.print("  Run: [bold]vault-sources db init[/]")
        return

    table = Table(title=f"Ledger: {c['db_path']}", show_header=True)
    table.add_column("Table")
    table.add_column("Rows", justify="right")
    for name, count in store.counts().items():
        table.add_row(name, str(count))
    console.print(table)
