"""Tests for InputStore."""

import hashlib

import pytest

from ledger import InvalidArgumentError, NotFoundError
from shared_types import EventType, InputState


def _sha(text):
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class TestStore:
    def test_store_new(self, repos):
        result = repos["inputs"].store("in-1", "hello world", {"source": "test"})
        assert result.duplicate is False
        stored = result.input
        assert stored.input_id == "in-1"
        assert stored.content == "hello world"
        assert stored.content_sha256 == _sha("hello world")
        assert stored.state == InputState.ACTIVE
        assert stored.meta == {"source": "test"}
        assert stored.created_at.endswith("Z")

    def test_store_appends_event(self, repos):
        repos["inputs"].store("in-1", "hello world")
        events = repos["events"].query(event_type=EventType.INPUT_STORED)
        assert len(events) == 1
        assert events[0].payload == {"input_id": "in-1", "content_sha256": _sha("hello world")}

    def test_duplicate_returns_existing(self, repos):
        first = repos["inputs"].store("in-1", "same text", {"v": 1}).input
        result = repos["inputs"].store("in-2", "same text", {"v": 2})
        assert result.duplicate is True
        assert result.input.input_id == "in-1"
        assert result.input.meta == {"v": 1}
        assert result.input.created_at == first.created_at
        assert repos["inputs"].find_by_id("in-2") is None

    def test_duplicate_appends_no_event(self, repos):
        repos["inputs"].store("in-1", "same text")
        repos["inputs"].store("in-2", "same text")
        assert len(repos["events"].query(event_type=EventType.INPUT_STORED)) == 1

    def test_different_content_is_not_duplicate(self, repos, sample_inputs):
        for i, item in enumerate(sample_inputs):
            result = repos["inputs"].store(f"in-{i}", item["content"], item["meta"])
            assert result.duplicate is False
        assert repos["db"].counts()["inputs"] == 3

    def test_hash_is_exact_bytes(self, repos):
        repos["inputs"].store("in-1", "Text")
        assert repos["inputs"].store("in-2", "text").duplicate is False
        assert repos["inputs"].store("in-3", "text ").duplicate is False

    def test_unicode_content(self, repos):
        stored = repos["inputs"].store("in-1", "café ☕").input
        assert stored.content_sha256 == _sha("café ☕")

    def test_empty_content_rejected(self, repos):
        with pytest.raises(InvalidArgumentError):
            repos["inputs"].store("in-1", "")
        assert repos["db"].counts()["inputs"] == 0

    def test_empty_id_rejected(self, repos):
        with pytest.raises(InvalidArgumentError):
            repos["inputs"].store("", "content")

    def test_lone_surrogate_content_rejected(self, repos):
        with pytest.raises(InvalidArgumentError, match="UTF-8"):
            repos["inputs"].store("in-1", "broken \ud800 text")
        assert repos["db"].counts() == {"inputs": 0, "notes": 0, "links": 0, "events": 1}

    def test_lone_surrogate_id_rejected(self, repos):
        with pytest.raises(InvalidArgumentError, match="UTF-8"):
            repos["inputs"].store("in-\udfff", "content")
        assert repos["db"].counts()["inputs"] == 0

    def test_non_mapping_meta_rejected(self, repos):
        with pytest.raises(InvalidArgumentError):
            repos["inputs"].store("in-1", "content", ["not", "a", "dict"])

    def test_reused_id_with_new_content_fails(self, repos):
        from ledger import StorageFailureError

        repos["inputs"].store("in-1", "first")
        with pytest.raises(StorageFailureError):
            repos["inputs"].store("in-1", "second")
        assert repos["inputs"].get_by_id("in-1").content == "first"
        assert len(repos["events"].query(event_type=EventType.INPUT_STORED)) == 1


class TestLookup:
    def test_get_by_id(self, repos):
        repos["inputs"].store("in-1", "abc")
        assert repos["inputs"].get_by_id("in-1").content == "abc"

    def test_get_missing_raises(self, repos):
        with pytest.raises(NotFoundError) as exc:
            repos["inputs"].get_by_id("missing")
        assert exc.value.code == "ENTITY_NOT_FOUND"
        assert "missing" in exc.value.message

    def test_find_missing_returns_none(self, repos):
        assert repos["inputs"].find_by_id("missing") is None

    def test_find_by_sha256(self, repos):
        repos["inputs"].store("in-1", "abc")
        assert repos["inputs"].find_by_sha256(_sha("abc")).input_id == "in-1"
        assert repos["inputs"].find_by_sha256(_sha("xyz")) is None

    def test_find_by_sha256_ignores_redacted(self, repos):
        repos["inputs"].store("in-1", "abc")
        repos["inputs"].redact("in-1")
        assert repos["inputs"].find_by_sha256(_sha("abc")) is None


class TestList:
    def test_list_in_creation_order(self, repos, sample_inputs):
        for i, item in enumerate(sample_inputs):
            repos["inputs"].store(f"in-{i}", item["content"])
        ids = [i.input_id for i in repos["inputs"].list()]
        assert ids == ["in-0", "in-1", "in-2"]

    def test_list_filters_by_state(self, repos, sample_inputs):
        for i, item in enumerate(sample_inputs):
            repos["inputs"].store(f"in-{i}", item["content"])
        repos["inputs"].redact("in-1")

        active = repos["inputs"].list(state=InputState.ACTIVE)
        redacted = repos["inputs"].list(state="redacted")
        assert [i.input_id for i in active] == ["in-0", "in-2"]
        assert [i.input_id for i in redacted] == ["in-1"]
        assert redacted[0].content is None

    def test_list_paging(self, repos):
        for n in range(5):
            repos["inputs"].store(f"in-{n}", f"content {n}")
        page = repos["inputs"].list(limit=2, offset=2)
        assert [i.input_id for i in page] == ["in-2", "in-3"]
        assert repos["inputs"].list(limit=10, offset=5) == []

    def test_list_ties_broken_by_insertion(self, repos, clock):
        # same millisecond for every insert
        clock.step = clock.step * 0
        for n in range(3):
            repos["inputs"].store(f"in-{n}", f"content {n}")
        assert [i.input_id for i in repos["inputs"].list()] == ["in-0", "in-1", "in-2"]

    def test_invalid_state(self, repos):
        with pytest.raises(InvalidArgumentError):
            repos["inputs"].list(state="archived")

    @pytest.mark.parametrize("limit,offset", [(0, 0), (-1, 0), (10, -1)])
    def test_invalid_paging(self, repos, limit, offset):
        with pytest.raises(InvalidArgumentError):
            repos["inputs"].list(limit=limit, offset=offset)


class TestRedact:
    def test_redact_clears_content(self, repos):
        repos["inputs"].store("in-1", "secret", {"source": "chat"})
        redacted = repos["inputs"].redact("in-1")
        assert redacted.content is None
        assert redacted.state == InputState.REDACTED
        assert redacted.is_redacted

        stored = repos["inputs"].get_by_id("in-1")
        assert stored.content is None
        assert stored.state == InputState.REDACTED
        assert stored.content_sha256 == _sha("secret")
        assert stored.meta == {"source": "chat"}

    def test_redact_appends_event(self, repos):
        repos["inputs"].store("in-1", "secret")
        repos["inputs"].redact("in-1")
        events = repos["events"].query(event_type=EventType.INPUT_REDACTED)
        assert [e.payload for e in events] == [{"input_id": "in-1"}]

    def test_redact_twice_records_both(self, repos):
        repos["inputs"].store("in-1", "secret")
        repos["inputs"].redact("in-1")
        again = repos["inputs"].redact("in-1")
        assert again.state == InputState.REDACTED
        assert len(repos["events"].query(event_type=EventType.INPUT_REDACTED)) == 2

    def test_redact_missing_raises(self, repos):
        with pytest.raises(NotFoundError):
            repos["inputs"].redact("missing")
        assert repos["events"].query(event_type=EventType.INPUT_REDACTED) == []

    def test_restore_after_redaction_creates_new_input(self, repos):
        repos["inputs"].store("in-1", "secret")
        repos["inputs"].redact("in-1")

        result = repos["inputs"].store("in-2", "secret")
        assert result.duplicate is False
        assert result.input.input_id == "in-2"
        assert repos["inputs"].get_by_id("in-1").is_redacted
        assert repos["inputs"].find_by_sha256(_sha("secret")).input_id == "in-2"

    def test_to_dict_without_content(self, repos):
        stored = repos["inputs"].store("in-1", "abc").input
        d = stored.to_dict(include_content=False)
        assert "content" not in d
        assert d["state"] == "active"
