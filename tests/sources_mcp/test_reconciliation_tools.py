"""Tests for reconciliation and event log MCP tools."""

import pytest

from ledger import InvalidArgumentError


def test_find_stale_notes(components, clock):
    from sources_mcp.tools.reconciliation import _find_stale_notes

    components["notes"].register("old", {"title": "Old"})
    clock.advance(days=40)
    components["notes"].register("fresh")

    result = _find_stale_notes({"not_seen_since": "2025-01-15"})
    assert result["count"] == 1
    assert result["notes"][0]["note_id"] == "old"
    assert result["notes"][0]["meta"] == {"title": "Old"}
    assert set(result["notes"][0]) == {"note_id", "last_seen_at", "meta"}


def test_find_stale_notes_requires_threshold(components):
    from sources_mcp.tools.reconciliation import _find_stale_notes

    with pytest.raises(InvalidArgumentError):
        _find_stale_notes({})


def test_find_stale_notes_rejects_bad_date(components):
    from sources_mcp.tools.reconciliation import _find_stale_notes

    with pytest.raises(InvalidArgumentError):
        _find_stale_notes({"not_seen_since": "a while ago"})


def test_find_orphaned_inputs(components):
    from sources_mcp.tools.reconciliation import _find_orphaned_inputs

    components["inputs"].store("in-1", "linked")
    components["inputs"].store("in-2", "orphan")
    components["notes"].register("n1")
    components["links"].add("in-1", "n1")

    result = _find_orphaned_inputs({})
    assert result["count"] == 1
    assert result["inputs"][0]["input_id"] == "in-2"
    assert "content" not in result["inputs"][0]


def test_find_unlinked_notes(components):
    from sources_mcp.tools.reconciliation import _find_unlinked_notes

    components["notes"].register("n1")
    result = _find_unlinked_notes({})
    assert result == {"notes": [components["notes"].get_by_id("n1").to_dict()], "count": 1}


def test_get_event_log(components):
    from sources_mcp.tools.reconciliation import _get_event_log

    components["inputs"].store("in-1", "a")
    components["notes"].register("n1")

    result = _get_event_log({})
    assert [e["event_type"] for e in result["events"]] == ["DB_INITIALIZED", "INPUT_STORED", "NOTE_SEEN"]
    assert result["count"] == 3


def test_get_event_log_filters(components, clock):
    from sources_mcp.tools.reconciliation import _get_event_log

    components["notes"].register("n1")
    clock.advance(days=2)
    components["notes"].register("n2")
    components["inputs"].store("in-1", "a")

    seen = _get_event_log({"event_type": "NOTE_SEEN"})
    assert seen["count"] == 2

    recent = _get_event_log({"since": "2025-01-02T00:00:00Z"})
    assert [e["event_type"] for e in recent["events"]] == ["NOTE_SEEN", "INPUT_STORED"]

    page = _get_event_log({"limit": 1, "offset": 1})
    assert page["events"][0]["event_id"] == 2


def test_get_event_log_unknown_type(components):
    from sources_mcp.tools.reconciliation import _get_event_log

    with pytest.raises(InvalidArgumentError):
        _get_event_log({"event_type": "BOGUS"})
