"""Note MCP tools — register, get, mark deleted."""

from shared_types import FRONTMATTER_KEY
from sources_mcp.bootstrap import require_arg, require_ledger


def _register_note(args: dict) -> dict:
    c = require_ledger()
    note = c["notes"].register(require_arg(args, "note_id"), args.get("meta"))
    return {
        "note_id": note.note_id,
        "created_at": note.created_at,
        "last_seen_at": note.last_seen_at,
    }


def _get_note(args: dict) -> dict:
    c = require_ledger()
    note_id = require_arg(args, "note_id")
    note = c["notes"].get_by_id(note_id)
    result = note.to_dict()
    result["linked_input_ids"] = c["links"].get_input_ids_for_note(note_id)
    return result


def _mark_note_deleted(args: dict) -> dict:
    c = require_ledger()
    note = c["notes"].mark_deleted(require_arg(args, "note_id"))
    return {"note_id": note.note_id, "message": "Note marked as deleted."}


TOOLS = [
    (
        "register_note",
        {
            "description": (
                "Register a note in the provenance database. Idempotent. If the note already exists, "
                f"updates last_seen_at. Call this after injecting the {FRONTMATTER_KEY} into the note's frontmatter."
            ),
            "type": "object",
            "properties": {
                "note_id": {"type": "string", "description": "The UUIDv7 note ID (from generate_note_id)."},
                "meta": {
                    "type": "object",
                    "description": "Optional metadata about the note. Replaces stored meta when given.",
                    "additionalProperties": True,
                },
            },
            "required": ["note_id"],
        },
        _register_note,
    ),
    (
        "get_note",
        {
            "description": "Retrieve a note record by its ID, including its list of linked input IDs.",
            "type": "object",
            "properties": {
                "note_id": {"type": "string", "description": "The note ID to retrieve."},
            },
            "required": ["note_id"],
        },
        _get_note,
    ),
    (
        "mark_note_deleted",
        {
            "description": (
                "Mark a note as deleted. Does NOT remove the row; it is preserved for audit. "
                "Call this when a vault file has been removed."
            ),
            "type": "object",
            "properties": {
                "note_id": {"type": "string", "description": "The note ID to mark as deleted."},
            },
            "required": ["note_id"],
        },
        _mark_note_deleted,
    ),
]
