"""Input commands — add, list, show, redact."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cli.utils import fail, get_ledger, parse_meta
from fileio import read_input_file
from idgen import uuid7
from ledger import LedgerError

console = Console()


@click.group()
def inputs():
    """Raw source inputs (deduplicated by content hash)."""
    pass


@inputs.command("add")
@click.argument("file", required=False, type=click.Path(path_type=Path))
@click.option("--text", help="Inline content instead of a file")
@click.option("--meta", help="Metadata as a JSON object")
def inputs_add(file: Path | None, text: str | None, meta: str | None):
    """Store an input from FILE or --text."""
    if bool(file) == bool(text):
        fail("Give exactly one of FILE or --text")
    c = get_ledger()
    meta_dict = parse_meta(meta)

    try:
        if file:
            path, content = read_input_file(str(file))
            meta_dict = {"file_path": str(path), "filename": path.name, **(meta_dict or {})}
        else:
            content = text
        stored, duplicate = c["inputs"].store(uuid7(), content, meta_dict)
    except LedgerError as e:
        fail(e)

    if duplicate:
        console.print(f"[yellow]Duplicate of[/] {stored.input_id}")
    else:
        console.print(f"[green]Stored:[/] {stored.input_id}")
    console.print(f"sha256: {stored.content_sha256}")


@inputs.command("list")
@click.option("--state", type=click.Choice(["active", "redacted"]), help="Filter by state")
@click.option("-n", "--limit", type=int, default=None, help="Max inputs to show")
@click.option("--offset", type=int, default=0, help="Skip this many inputs")
def inputs_list(state: str | None, limit: int | None, offset: int):
    """List inputs, oldest first."""
    c = get_ledger()
    try:
        rows = c["inputs"].list(state=state, limit=c["config_model"].limits.clamp(limit), offset=offset)
    except LedgerError as e:
        fail(e)

    if not rows:
        console.print("[yellow]No inputs found.[/]")
        return

    table = Table(show_header=True)
    table.add_column("Input ID")
    table.add_column("State")
    table.add_column("Created")
    table.add_column("SHA-256")
    for i in rows:
        state_str = "[red]redacted[/]" if i.is_redacted else "active"
        table.add_row(i.input_id, state_str, i.created_at, i.content_sha256[:12])
    console.print(table)


@inputs.command("show")
@click.argument("input_id")
def inputs_show(input_id: str):
    """Show one input with its content."""
    c = get_ledger()
    try:
        found = c["inputs"].get_by_id(input_id)
    except LedgerError as e:
        fail(e)

    console.print(f"[bold]{found.input_id}[/] ({found.state.value})")
    console.print(f"created: {found.created_at}")
    console.print(f"sha256:  {found.content_sha256}")
    if found.meta:
        console.print(f"meta:    {found.meta}")
    console.print()
    if found.is_redacted:
        console.print("[dim]\\[REDACTED][/]")
    else:
        console.print(found.content, markup=False, highlight=False)


@inputs.command("redact")
@click.argument("input_id")
@click.confirmation_option(prompt="Redaction is irreversible. Continue?")
def inputs_redact(input_id: str):
    """Null an input's content. Metadata and links are kept."""
    c = get_ledger()
    try:
        c["inputs"].redact(input_id)
    except LedgerError as e:
        fail(e)
    console.print(f"[green]Redacted:[/] {input_id}")
