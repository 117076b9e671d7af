"""Shared fixtures for MCP tests."""

import pytest

import sources_mcp.bootstrap
from cli.config_models import LedgerConfig
from ledger import open_ledger


@pytest.fixture(autouse=True)
def reset_bootstrap():
    """Reset the bootstrap singleton between tests."""
    sources_mcp.bootstrap._components = None
    yield
    sources_mcp.bootstrap._components = None


def _install(db_path, clock, initialize):
    components = open_ledger(db_path, clock=clock, initialize=initialize)
    config_model = LedgerConfig.from_dict({"paths": {"db_path": str(db_path)}})
    components.update(config=config_model.to_dict(), config_model=config_model, db_path=db_path)
    sources_mcp.bootstrap._components = components
    return components


@pytest.fixture
def components(tmp_path, clock, monkeypatch):
    """Initialized ledger installed as the bootstrap singleton."""
    monkeypatch.delenv("VAULT_SOURCES_DB_PATH", raising=False)
    c = _install(tmp_path / "ledger.sqlite", clock, initialize=True)
    yield c
    c["db"].close()


@pytest.fixture
def fresh_components(tmp_path, clock, monkeypatch):
    """Opened but uninitialized ledger installed as the bootstrap singleton."""
    monkeypatch.delenv("VAULT_SOURCES_DB_PATH", raising=False)
    c = _install(tmp_path / "ledger.sqlite", clock, initialize=False)
    yield c
    c["db"].close()
