"""ID MCP tools — time-sortable note identifiers for vault frontmatter."""

from idgen import uuid7
from shared_types import FRONTMATTER_KEY


def _generate_note_id(args: dict) -> dict:
    note_id = uuid7()
    return {
        "note_id": note_id,
        "frontmatter_key": FRONTMATTER_KEY,
        "frontmatter_snippet": f"{FRONTMATTER_KEY}: {note_id}",
    }


TOOLS = [
    (
        "generate_note_id",
        {
            "description": (
                "Generate a new UUIDv7 note ID. Returns the ID and the frontmatter key to use. "
                "Does NOT register the note; call register_note after injecting the ID into the markdown."
            ),
            "type": "object",
            "properties": {},
            "required": [],
        },
        _generate_note_id,
    ),
]
