"""Input MCP tools — store (inline or from file), get, list, redact."""

from fileio import read_input_file
from idgen import uuid7
from sources_mcp.bootstrap import page_size, require_arg, require_ledger

REDACTED_PLACEHOLDER = "[REDACTED]"


def _store(content: str, meta: dict | None) -> dict:
    c = require_ledger()
    result = c["inputs"].store(uuid7(), content, meta)
    return {
        "input_id": result.input.input_id,
        "content_sha256": result.input.content_sha256,
        "duplicate": result.duplicate,
    }


def _store_input(args: dict) -> dict:
    return _store(require_arg(args, "content"), args.get("meta"))


def _store_input_from_file(args: dict) -> dict:
    """Read a file and store it; user meta overrides the file_path/filename defaults."""
    file_path = require_arg(args, "file_path")
    require_ledger()
    path, content = read_input_file(file_path)
    meta = {"file_path": str(path), "filename": path.name, **(args.get("meta") or {})}
    result = _store(content, meta)
    result["file_path"] = str(path)
    return result


def _get_input(args: dict) -> dict:
    c = require_ledger()
    found = c["inputs"].get_by_id(require_arg(args, "input_id"))
    d = found.to_dict()
    if found.is_redacted:
        d["content"] = REDACTED_PLACEHOLDER
    return d


def _list_inputs(args: dict) -> dict:
    c = require_ledger()
    inputs = c["inputs"].list(
        state=args.get("state"),
        limit=page_size(args),
        offset=args.get("offset", 0),
    )
    return {
        "inputs": [i.to_dict(include_content=False) for i in inputs],
        "count": len(inputs),
    }


def _redact_input(args: dict) -> dict:
    c = require_ledger()
    redacted = c["inputs"].redact(require_arg(args, "input_id"))
    return {
        "input_id": redacted.input_id,
        "state": redacted.state.value,
        "message": "Input redacted successfully.",
    }


_META_SCHEMA = {
    "type": "object",
    "description": "Optional metadata (e.g. source URL, title, type).",
    "additionalProperties": True,
}

TOOLS = [
    (
        "store_input",
        {
            "description": (
                "Store a raw input (transcript, article, excerpt, etc.). Content is hashed for "
                "deduplication. Returns the input ID and whether it was a duplicate."
            ),
            "type": "object",
            "properties": {
                "content": {"type": "string", "minLength": 1, "description": "The raw text content to store."},
                "meta": _META_SCHEMA,
            },
            "required": ["content"],
        },
        _store_input,
    ),
    (
        "store_input_from_file",
        {
            "description": (
                "Read a UTF-8 text file and store its content as an input. file_path and filename are "
                "added to the metadata; user-supplied meta overrides them. Deduplicates like store_input."
            ),
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Path to the file to read."},
                "meta": _META_SCHEMA,
            },
            "required": ["file_path"],
        },
        _store_input_from_file,
    ),
    (
        "get_input",
        {
            "description": "Retrieve an input by its ID. Returns content (or [REDACTED]) and metadata.",
            "type": "object",
            "properties": {
                "input_id": {"type": "string", "description": "The input ID to retrieve."},
            },
            "required": ["input_id"],
        },
        _get_input,
    ),
    (
        "list_inputs",
        {
            "description": "List stored inputs (without full content). Supports pagination and state filtering.",
            "type": "object",
            "properties": {
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 500,
                    "description": "Max results (default 100).",
                },
                "offset": {"type": "integer", "minimum": 0, "description": "Offset for pagination."},
                "state": {
                    "type": "string",
                    "enum": ["active", "redacted"],
                    "description": "Filter by state.",
                },
            },
            "required": [],
        },
        _list_inputs,
    ),
    (
        "redact_input",
        {
            "description": "Redact an input. Nulls the content but preserves metadata and provenance links. Irreversible.",
            "type": "object",
            "properties": {
                "input_id": {"type": "string", "description": "The input ID to redact."},
            },
            "required": ["input_id"],
        },
        _redact_input,
    ),
]
