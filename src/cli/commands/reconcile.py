"""Reconciliation commands and the event log viewer."""

import json
from datetime import datetime, timedelta, timezone

import click
from rich.console import Console
from rich.table import Table

from cli.utils import fail, get_ledger
from ledger import LedgerError
from shared_types import EventType

console = Console()


@click.group()
def reconcile():
    """Find records that have drifted from the vault."""
    pass


@reconcile.command("orphans")
def reconcile_orphans():
    """Inputs not linked to any note."""
    c = get_ledger()
    try:
        orphaned = c["links"].find_orphaned_inputs()
    except LedgerError as e:
        fail(e)

    if not orphaned:
        console.print("[green]No orphaned inputs.[/]")
        return

    table = Table(title=f"Orphaned inputs ({len(orphaned)})", show_header=True)
    table.add_column("Input ID")
    table.add_column("State")
    table.add_column("Created")
    for i in orphaned:
        table.add_row(i.input_id, i.state.value, i.created_at)
    console.print(table)


@reconcile.command("unlinked")
def reconcile_unlinked():
    """Notes with no linked input."""
    c = get_ledger()
    try:
        unlinked = c["notes"].find_unlinked()
    except LedgerError as e:
        fail(e)

    if not unlinked:
        console.print("[green]No unlinked notes.[/]")
        return

    table = Table(title=f"Unlinked notes ({len(unlinked)})", show_header=True)
    table.add_column("Note ID")
    table.add_column("Created")
    table.add_column("Last seen")
    for n in unlinked:
        table.add_row(n.note_id, n.created_at, n.last_seen_at)
    console.print(table)


@reconcile.command("stale")
@click.option("--since", help="ISO 8601 threshold; notes last seen before it are stale")
@click.option("--days", type=int, default=30, help="Threshold in days ago (ignored with --since)")
def reconcile_stale(since: str | None, days: int):
    """Notes not seen since a threshold. Check whether their files still exist."""
    c = get_ledger()
    threshold = since or datetime.now(timezone.utc) - timedelta(days=days)
    try:
        stale = c["notes"].find_stale(threshold)
    except LedgerError as e:
        fail(e)

    if not stale:
        console.print("[green]No stale notes.[/]")
        return

    table = Table(title=f"Stale notes ({len(stale)})", show_header=True)
    table.add_column("Note ID")
    table.add_column("Last seen")
    for n in stale:
        table.add_row(n.note_id, n.last_seen_at)
    console.print(table)


@click.command()
@click.option("-t", "--type", "event_type", type=click.Choice([t.value for t in EventType]),
              help="Filter by event type")
@click.option("--since", help="ISO 8601 timestamp (inclusive)")
@click.option("-n", "--limit", type=int, default=None, help="Max events to show")
@click.option("--offset", type=int, default=0, help="Skip this many events")
def events(event_type: str | None, since: str | None, limit: int | None, offset: int):
    """Show the append-only event log."""
    c = get_ledger()
    try:
        rows = c["events"].query(
            event_type=event_type,
            since=since,
            limit=c["config_model"].limits.clamp(limit),
            offset=offset,
        )
    except LedgerError as e:
        fail(e)

    if not rows:
        console.print("[yellow]No events.[/]")
        return

    table = Table(show_header=True)
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Timestamp")
    table.add_column("Payload")
    for e in rows:
        table.add_row(str(e.event_id), e.event_type.value, e.timestamp, json.dumps(e.payload))
    console.print(table)
