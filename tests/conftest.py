"""Shared test fixtures for vault-sources."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class FakeClock:
    """Deterministic clock; advances 1 ms per reading unless frozen."""

    def __init__(self, start: datetime | None = None, step_ms: int = 1):
        self.current = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)

    def rewind(self, **kwargs):
        self.current = self.current - timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repos(clock):
    """In-memory, initialized ledger with repositories wired up."""
    from ledger import open_ledger

    components = open_ledger(":memory:", clock=clock, initialize=True)
    yield components
    components["db"].close()


@pytest.fixture
def file_repos(tmp_path, clock):
    """Initialized ledger backed by a file in tmp_path."""
    from ledger import open_ledger

    components = open_ledger(tmp_path / "ledger.sqlite", clock=clock, initialize=True)
    yield components
    components["db"].close()


@pytest.fixture
def sample_inputs():
    return [
        {
            "content": "Composting requires a balance of green and brown materials.",
            "meta": {"source": "youtube", "title": "Composting 101"},
        },
        {
            "content": "Raised beds warm faster in spring and drain better.",
            "meta": {"source": "article", "url": "https://example.com/raised-beds"},
        },
        {
            "content": "Tomatoes need at least six hours of direct sun.",
            "meta": None,
        },
    ]
