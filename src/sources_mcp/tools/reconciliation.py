"""Reconciliation MCP tools — stale notes, orphaned inputs, unlinked notes, event log."""

from shared_types import EventType
from sources_mcp.bootstrap import page_size, require_arg, require_ledger


def _find_stale_notes(args: dict) -> dict:
    c = require_ledger()
    notes = c["notes"].find_stale(require_arg(args, "not_seen_since"))
    return {
        "notes": [
            {"note_id": n.note_id, "last_seen_at": n.last_seen_at, "meta": n.meta} for n in notes
        ],
        "count": len(notes),
    }


def _find_orphaned_inputs(args: dict) -> dict:
    c = require_ledger()
    orphaned = c["links"].find_orphaned_inputs()
    return {
        "inputs": [i.to_dict(include_content=False) for i in orphaned],
        "count": len(orphaned),
    }


def _find_unlinked_notes(args: dict) -> dict:
    c = require_ledger()
    unlinked = c["notes"].find_unlinked()
    return {"notes": [n.to_dict() for n in unlinked], "count": len(unlinked)}


def _get_event_log(args: dict) -> dict:
    c = require_ledger()
    events = c["events"].query(
        event_type=args.get("event_type"),
        since=args.get("since"),
        limit=page_size(args),
        offset=args.get("offset", 0),
    )
    return {"events": [e.to_dict() for e in events], "count": len(events)}


TOOLS = [
    (
        "find_stale_notes",
        {
            "description": (
                "Find notes that have not been seen since a given date. "
                "Check whether these files still exist in the vault."
            ),
            "type": "object",
            "properties": {
                "not_seen_since": {
                    "type": "string",
                    "description": "ISO 8601 date threshold. Notes last seen before this date are returned.",
                },
            },
            "required": ["not_seen_since"],
        },
        _find_stale_notes,
    ),
    (
        "find_orphaned_inputs",
        {
            "description": (
                "Find inputs that have no provenance links to any note. "
                "These inputs were stored but never linked, or all their links were removed."
            ),
            "type": "object",
            "properties": {},
            "required": [],
        },
        _find_orphaned_inputs,
    ),
    (
        "find_unlinked_notes",
        {
            "description": (
                "Find notes that have no provenance links to any input. "
                "These notes have no known source tracked in the database."
            ),
            "type": "object",
            "properties": {},
            "required": [],
        },
        _find_unlinked_notes,
    ),
    (
        "get_event_log",
        {
            "description": "Query the append-only event log. Supports filtering by event type and time range.",
            "type": "object",
            "properties": {
                "event_type": {
                    "type": "string",
                    "enum": [t.value for t in EventType],
                    "description": "Filter by event type.",
                },
                "since": {
                    "type": "string",
                    "description": "ISO 8601 timestamp. Only return events at or after this time.",
                },
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 500,
                    "description": "Max results (default 100).",
                },
                "offset": {"type": "integer", "minimum": 0, "description": "Offset for pagination."},
            },
            "required": [],
        },
        _get_event_log,
    ),
]
