"""Lazy component initialization for MCP server."""

import structlog

from ledger import InvalidArgumentError, NotInitializedError

logger = structlog.get_logger()

_components = None


def get_components() -> dict:
    """Lazy singleton wrapping cli.utils.get_components().

    The store is opened at the configured path but may not be initialized yet;
    db_status/db_init work on it either way.
    """
    global _components
    if _components is None:
        from cli.utils import get_components as _get

        _components = _get()
        logger.info("mcp_bootstrap_init", db_path=str(_components["db_path"]))
    return _components


def require_ledger() -> dict:
    """Components for tools that need an initialized schema."""
    c = get_components()
    if not c["db"].is_initialized():
        raise NotInitializedError()
    return c


def page_size(args: dict) -> int:
    """The ``limit`` argument, defaulted and capped by config limits."""
    c = get_components()
    return c["config_model"].limits.clamp(args.get("limit"))


def require_arg(args: dict, key: str) -> str:
    value = args.get(key)
    if not value:
        raise InvalidArgumentError(f"{key} is required")
    return value
