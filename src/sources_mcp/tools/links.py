"""Link MCP tools — add/remove provenance links, traverse them both ways."""

from sources_mcp.bootstrap import require_arg, require_ledger


def _add_link(args: dict) -> dict:
    c = require_ledger()
    link, created = c["links"].add(require_arg(args, "input_id"), require_arg(args, "note_id"))
    return {
        "input_id": link.input_id,
        "note_id": link.note_id,
        "created": created,
        "created_at": link.created_at,
    }


def _remove_link(args: dict) -> dict:
    c = require_ledger()
    input_id = require_arg(args, "input_id")
    note_id = require_arg(args, "note_id")
    removed = c["links"].remove(input_id, note_id)
    return {
        "input_id": input_id,
        "note_id": note_id,
        "removed": removed,
        "message": "Link removed." if removed else "Link did not exist.",
    }


def _get_sources_for_note(args: dict) -> dict:
    c = require_ledger()
    sources = c["links"].get_sources_for_note(require_arg(args, "note_id"))
    return {
        "sources": [s.to_dict(include_content=False) for s in sources],
        "count": len(sources),
    }


def _get_notes_for_input(args: dict) -> dict:
    c = require_ledger()
    notes = c["links"].get_notes_for_input(require_arg(args, "input_id"))
    return {"notes": [n.to_dict() for n in notes], "count": len(notes)}


_ENDPOINTS = {
    "input_id": {"type": "string", "description": "The input ID."},
    "note_id": {"type": "string", "description": "The note ID."},
}

TOOLS = [
    (
        "add_link",
        {
            "description": (
                "Create a provenance link between an input and a note. Both must already exist. "
                "Idempotent: re-adding the same link is a no-op."
            ),
            "type": "object",
            "properties": _ENDPOINTS,
            "required": ["input_id", "note_id"],
        },
        _add_link,
    ),
    (
        "remove_link",
        {
            "description": "Remove a provenance link between an input and a note.",
            "type": "object",
            "properties": _ENDPOINTS,
            "required": ["input_id", "note_id"],
        },
        _remove_link,
    ),
    (
        "get_sources_for_note",
        {
            "description": "Get all inputs linked to a note, redacted ones included. Returns metadata, not full content.",
            "type": "object",
            "properties": {
                "note_id": {"type": "string", "description": "The note ID to query."},
            },
            "required": ["note_id"],
        },
        _get_sources_for_note,
    ),
    (
        "get_notes_for_input",
        {
            "description": "Get all notes linked to an input.",
            "type": "object",
            "properties": {
                "input_id": {"type": "string", "description": "The input ID to query."},
            },
            "required": ["input_id"],
        },
        _get_notes_for_input,
    ),
]
