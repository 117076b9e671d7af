"""Tests for link MCP tools."""

import pytest

from ledger import NotFoundError


@pytest.fixture
def seeded(components):
    components["inputs"].store("in-1", "Composting basics")
    components["inputs"].store("in-2", "Raised beds")
    components["notes"].register("note-1")
    return components


def test_add_link(seeded):
    from sources_mcp.tools.links import _add_link

    result = _add_link({"input_id": "in-1", "note_id": "note-1"})
    assert result["created"] is True
    assert result["created_at"].endswith("Z")

    again = _add_link({"input_id": "in-1", "note_id": "note-1"})
    assert again["created"] is False
    assert again["created_at"] == result["created_at"]


def test_add_link_missing_endpoint(seeded):
    from sources_mcp.tools.links import _add_link

    with pytest.raises(NotFoundError) as exc:
        _add_link({"input_id": "in-1", "note_id": "ghost"})
    assert exc.value.message == "Note not found: ghost"


def test_remove_link(seeded):
    from sources_mcp.tools.links import _add_link, _remove_link

    _add_link({"input_id": "in-1", "note_id": "note-1"})
    result = _remove_link({"input_id": "in-1", "note_id": "note-1"})
    assert result["removed"] is True
    assert result["message"] == "Link removed."

    again = _remove_link({"input_id": "in-1", "note_id": "note-1"})
    assert again["removed"] is False
    assert again["message"] == "Link did not exist."


def test_get_sources_for_note(seeded):
    from sources_mcp.tools.links import _get_sources_for_note

    seeded["links"].add("in-1", "note-1")
    seeded["links"].add("in-2", "note-1")
    seeded["inputs"].redact("in-2")

    result = _get_sources_for_note({"note_id": "note-1"})
    assert result["count"] == 2
    assert [s["input_id"] for s in result["sources"]] == ["in-1", "in-2"]
    assert result["sources"][1]["state"] == "redacted"
    assert all("content" not in s for s in result["sources"])


def test_get_notes_for_input(seeded):
    from sources_mcp.tools.links import _get_notes_for_input

    seeded["notes"].register("note-2")
    seeded["links"].add("in-1", "note-1")
    seeded["links"].add("in-1", "note-2")

    result = _get_notes_for_input({"input_id": "in-1"})
    assert result["count"] == 2
    assert [n["note_id"] for n in result["notes"]] == ["note-1", "note-2"]


def test_traversal_of_unknown_ids_is_empty(seeded):
    from sources_mcp.tools.links import _get_notes_for_input, _get_sources_for_note

    assert _get_sources_for_note({"note_id": "ghost"}) == {"sources": [], "count": 0}
    assert _get_notes_for_input({"input_id": "ghost"}) == {"notes": [], "count": 0}
