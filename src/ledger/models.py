"""Data models for the provenance ledger."""

import hashlib
import json
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, NamedTuple, Optional

from shared_types import EventType, InputState

from .errors import InvalidArgumentError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime | str) -> str:
    """Normalize an instant to ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Strings are parsed first so thresholds compare correctly against stored
    timestamps. Naive values are taken as UTC.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidArgumentError(f"Invalid ISO 8601 timestamp: {value!r}")
    if not isinstance(value, datetime):
        raise InvalidArgumentError(f"Expected datetime or ISO 8601 string, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def compute_sha256(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def encode_meta(meta: Optional[dict[str, Any]]) -> Optional[str]:
    if meta is None:
        return None
    if not isinstance(meta, dict):
        raise InvalidArgumentError(f"meta must be a mapping, got {type(meta).__name__}")
    try:
        return json.dumps(meta)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"meta is not JSON-serializable: {e}")


def decode_meta(meta_json: Optional[str]) -> Optional[dict[str, Any]]:
    if meta_json is None:
        return None
    return json.loads(meta_json)


def merge_meta(existing: Optional[dict[str, Any]], overrides: dict[str, Any]) -> dict[str, Any]:
    """Shallow merge: keys in ``overrides`` win, everything else is kept."""
    return {**(existing or {}), **overrides}


@dataclass
class Input:
    input_id: str
    content: Optional[str]
    content_sha256: str
    state: InputState
    created_at: str
    meta: Optional[dict[str, Any]] = None

    @property
    def is_redacted(self) -> bool:
        return self.state == InputState.REDACTED

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Input":
        return cls(
            input_id=row["input_id"],
            content=row["content"],
            content_sha256=row["content_sha256"],
            state=InputState(row["state"]),
            created_at=row["created_at"],
            meta=decode_meta(row["meta_json"]),
        )

    def to_dict(self, include_content: bool = True) -> dict:
        d = {
            "input_id": self.input_id,
            "content_sha256": self.content_sha256,
            "state": self.state.value,
            "created_at": self.created_at,
            "meta": self.meta,
        }
        if include_content:
            d["content"] = self.content
        return d


@dataclass
class Note:
    note_id: str
    created_at: str
    last_seen_at: str
    meta: Optional[dict[str, Any]] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Note":
        return cls(
            note_id=row["note_id"],
            created_at=row["created_at"],
            last_seen_at=row["last_seen_at"],
            meta=decode_meta(row["meta_json"]),
        )

    def to_dict(self) -> dict:
        return {
            "note_id": self.note_id,
            "created_at": self.created_at,
            "last_seen_at": self.last_seen_at,
            "meta": self.meta,
        }


@dataclass
class Link:
    input_id: str
    note_id: str
    created_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Link":
        return cls(input_id=row["input_id"], note_id=row["note_id"], created_at=row["created_at"])

    def to_dict(self) -> dict:
        return {"input_id": self.input_id, "note_id": self.note_id, "created_at": self.created_at}


@dataclass
class Event:
    event_id: int
    event_type: EventType
    timestamp: str
    payload: dict[str, Any]

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Event":
        return cls(
            event_id=row["event_id"],
            event_type=EventType(row["event_type"]),
            timestamp=row["timestamp"],
            payload=json.loads(row["payload"]),
        )

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp,
            "payload": self.payload,
        }


class StoreResult(NamedTuple):
    input: Input
    duplicate: bool


class LinkResult(NamedTuple):
    link: Link
    created: bool
