"""Shared CLI utilities."""

import json
import sys

import structlog
from rich.console import Console

from ledger import LedgerError

console = Console()
logger = structlog.get_logger()


def get_components(config_path=None) -> dict:
    """Load config and open the ledger at the configured path.

    Returns the repositories from ledger.open_ledger() plus ``config``,
    ``config_model`` and ``db_path``. The schema is not checked here; callers
    decide whether an uninitialized database is an error.
    """
    from cli.config import get_db_path, load_config_model
    from ledger import open_ledger

    config_model = load_config_model(config_path)
    config = config_model.to_dict()
    db_path = get_db_path(config)

    components = open_ledger(db_path)
    components.update(config=config, config_model=config_model, db_path=db_path)
    logger.debug("components_ready", db_path=str(db_path))
    return components


def fail(error: LedgerError | str) -> None:
    """Print an error in red and exit with status 1."""
    message = error.message if isinstance(error, LedgerError) else error
    console.print(f"[red]Error:[/] {message}")
    sys.exit(1)


def get_ledger() -> dict:
    """Components for commands that need an initialized ledger; exits otherwise."""
    try:
        c = get_components()
    except (LedgerError, ValueError) as e:
        fail(e if isinstance(e, LedgerError) else str(e))
    if not c["db"].is_initialized():
        fail(f"Ledger at {c['db_path']} is not initialized. Run [bold]vault-sources db init[/] first.")
    return c


def parse_meta(meta: str | None) -> dict | None:
    """Parse a --meta JSON option into a dict."""
    if not meta:
        return None
    try:
        value = json.loads(meta)
    except json.JSONDecodeError as e:
        fail(f"--meta is not valid JSON: {e}")
    if not isinstance(value, dict):
        fail("--meta must be a JSON object")
    return value
