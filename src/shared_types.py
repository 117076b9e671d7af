"""Shared enums and types for vault-sources."""

from enum import StrEnum


class InputState(StrEnum):
    ACTIVE = "active"
    REDACTED = "redacted"


class EventType(StrEnum):
    DB_INITIALIZED = "DB_INITIALIZED"
    INPUT_STORED = "INPUT_STORED"
    INPUT_REDACTED = "INPUT_REDACTED"
    NOTE_SEEN = "NOTE_SEEN"
    NOTE_MARKED_DELETED = "NOTE_MARKED_DELETED"
    NOTES_MERGED = "NOTES_MERGED"  # reserved for a future merge operation
    LINK_ADDED = "LINK_ADDED"
    LINK_REMOVED = "LINK_REMOVED"


# Frontmatter key agents write into vault notes to carry the note_id
FRONTMATTER_KEY = "vault_sources_mcp_id"
