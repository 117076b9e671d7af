"""CLI entry point for vault-sources."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import db, events, inputs, links, notes, reconcile
from cli.config import load_config
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
def cli(verbose: bool, json_logs: bool):
    """vault-sources - provenance ledger for vault notes and their raw inputs."""
    try:
        config = load_config()
    except ValueError as e:
        raise click.ClickException(str(e))
    log_config = config.get("logging", {})
    level = "DEBUG" if verbose else log_config.get("level", "INFO")
    setup_logging(json_mode=json_logs or log_config.get("json_mode", False), level=level)


@cli.command()
def serve():
    """Run the MCP server on stdio."""
    import asyncio

    from sources_mcp.server import run

    asyncio.run(run())


cli.add_command(db)
cli.add_command(inputs)
cli.add_command(notes)
cli.add_command(links)
cli.add_command(reconcile)
cli.add_command(events)


if __name__ == "__main__":
    cli()
