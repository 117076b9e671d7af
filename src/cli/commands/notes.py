"""Note commands — register, show, delete."""

import click
from rich.console import Console

from cli.utils import fail, get_ledger, parse_meta
from idgen import uuid7
from ledger import LedgerError
from shared_types import FRONTMATTER_KEY

console = Console()


@click.group()
def notes():
    """Registered vault notes."""
    pass


@notes.command("register")
@click.argument("note_id", required=False)
@click.option("--meta", help="Metadata as a JSON object (replaces stored meta)")
def notes_register(note_id: str | None, meta: str | None):
    """Register NOTE_ID as seen. Generates a new ID when omitted."""
    c = get_ledger()
    new_id = note_id is None
    try:
        note = c["notes"].register(note_id or uuid7(), parse_meta(meta))
    except LedgerError as e:
        fail(e)

    console.print(f"[green]Registered:[/] {note.note_id}")
    console.print(f"last seen: {note.last_seen_at}")
    if new_id:
        console.print(f"Add to frontmatter: [bold]{FRONTMATTER_KEY}: {note.note_id}[/]")


@notes.command("show")
@click.argument("note_id")
def notes_show(note_id: str):
    """Show a note and the inputs linked to it."""
    c = get_ledger()
    try:
        note = c["notes"].get_by_id(note_id)
        sources = c["links"].get_sources_for_note(note_id)
    except LedgerError as e:
        fail(e)

    console.print(f"[bold]{note.note_id}[/]")
    console.print(f"created:   {note.created_at}")
    console.print(f"last seen: {note.last_seen_at}")
    if note.meta:
        console.print(f"meta:      {note.meta}")
    console.print(f"\nSources ({len(sources)}):")
    for s in sources:
        suffix = " [red](redacted)[/]" if s.is_redacted else ""
        console.print(f"  {s.input_id}{suffix}")


@notes.command("delete")
@click.argument("note_id")
def notes_delete(note_id: str):
    """Tombstone a note whose vault file is gone. The record is kept."""
    c = get_ledger()
    try:
        c["notes"].mark_deleted(note_id)
    except LedgerError as e:
        fail(e)
    console.print(f"[green]Marked deleted:[/] {note_id}")
