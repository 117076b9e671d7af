"""Link commands: add, remove, and traverse provenance links."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import fail, get_ledger
from ledger import LedgerError

console = Console()


@click.group()
def links():
    """Provenance links between inputs and notes."""
    pass


@links.command("add")
@click.argument("input_id")
@click.argument("note_id")
def links_add(input_id: str, note_id: str):
    """Link INPUT_ID as a source of NOTE_ID."""
    c = get_ledger()
    try:
        _, created = c["links"].add(input_id, note_id)
    except LedgerError as e:
        fail(e)
    if created:
        console.print(f"[green]Linked[/] {input_id} -> {note_id}")
    else:
        console.print(f"[yellow]Already linked[/] {input_id} -> {note_id}")


@links.command("remove")
@click.argument("input_id")
@click.argument("note_id")
def links_remove(input_id: str, note_id: str):
    """Remove the link between INPUT_ID and NOTE_ID."""
    c = get_ledger()
    try:
        removed = c["links"].remove(input_id, note_id)
    except LedgerError as e:
        fail(e)
    if removed:
        console.print(f"[green]Removed[/] {input_id} -> {note_id}")
    else:
        console.print("[yellow]Link did not exist.[/]")


@links.command("sources")
@click.argument("note_id")
def links_sources(note_id: str):
    """List the inputs a note was derived from."""
    c = get_ledger()
    try:
        sources = c["links"].get_sources_for_note(note_id)
    except LedgerError as e:
        fail(e)

    if not sources:
        console.print("[yellow]No sources linked.[/]")
        return

    table = Table(show_header=True)
    table.add_column("Input ID")
    table.add_column("State")
    table.add_column("Meta")
    for s in sources:
        table.add_row(s.input_id, s.state.value, str(s.meta or ""))
    console.print(table)


@links.command("notes")
@click.argument("input_id")
def links_notes(input_id: str):
    """List the notes derived from an input."""
    c = get_ledger()
    try:
        derived = c["links"].get_notes_for_input(input_id)
    except LedgerError as e:
        fail(e)

    if not derived:
        console.print("[yellow]No notes linked.[/]")
        return

    table = Table(show_header=True)
    table.add_column("Note ID")
    table.add_column("Last seen")
    for n in derived:
        table.add_row(n.note_id, n.last_seen_at)
    console.print(table)
