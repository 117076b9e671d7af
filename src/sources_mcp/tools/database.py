"""Database MCP tools — status and first-time initialization."""

from pathlib import Path

import structlog

from ledger import AlreadyInitializedError
from sources_mcp.bootstrap import get_components

logger = structlog.get_logger()


def _status(args: dict) -> dict:
    c = get_components()
    db = c["db"]
    result = {"initialized": db.is_initialized(), "path": str(c["db_path"])}
    if result["initialized"]:
        result["stats"] = db.counts()
    return result


def _init(args: dict) -> dict:
    """Create the schema. Refuses to run twice."""
    c = get_components()
    db = c["db"]
    if db.is_initialized():
        raise AlreadyInitializedError()

    target = Path(args["path"]).expanduser() if args.get("path") else Path(c["db_path"])
    if str(target) != db.location:
        db.open(target)
        c["db_path"] = target

    db.initialize()
    logger.info("db_initialized", path=str(target))
    return {
        "initialized": True,
        "path": str(target),
        "message": "Database created and migrated successfully.",
    }


TOOLS = [
    (
        "db_status",
        {
            "description": "Check the database status. Returns whether the DB is initialized and row counts per table.",
            "type": "object",
            "properties": {},
            "required": [],
        },
        _status,
    ),
    (
        "db_init",
        {
            "description": "Initialize the database. Creates the SQLite file and all tables. Fails if already initialized.",
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "Database file path. Uses the configured default if omitted.",
                },
            },
            "required": [],
        },
        _init,
    ),
]
