"""Append-only event log. Every ledger mutation appends exactly one event."""

import json
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from shared_types import EventType

from .errors import InvalidArgumentError
from .models import Event, to_iso

if TYPE_CHECKING:
    from .store import LedgerStore

DEFAULT_PAGE_SIZE = 100


def coerce_event_type(event_type: EventType | str) -> EventType:
    try:
        return EventType(event_type)
    except ValueError:
        raise InvalidArgumentError(f"Unknown event type: {event_type}")


def check_page(limit: int, offset: int) -> None:
    if limit < 1:
        raise InvalidArgumentError(f"limit must be >= 1, got {limit}")
    if offset < 0:
        raise InvalidArgumentError(f"offset must be >= 0, got {offset}")


class EventLog:
    """Journal of domain events. There is no update or delete."""

    def __init__(self, db: "LedgerStore"):
        self.db = db

    def append(self, event_type: EventType | str, payload: dict[str, Any]) -> Event:
        event_type = coerce_event_type(event_type)
        payload_json = json.dumps(payload)
        with self.db.transaction():
            now = self.db.now()
            cursor = self.db.execute(
                "INSERT INTO events (event_type, timestamp, payload) VALUES (?, ?, ?)",
                (event_type.value, now, payload_json),
            )
        return Event(
            event_id=cursor.lastrowid,
            event_type=event_type,
            timestamp=now,
            payload=json.loads(payload_json),
        )

    def query(
        self,
        event_type: Optional[EventType | str] = None,
        since: Optional[datetime | str] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[Event]:
        """Events in append order. ``since`` is inclusive."""
        check_page(limit, offset)
        sql = "SELECT * FROM events WHERE 1=1"
        params: list = []
        if event_type:
            sql += " AND event_type = ?"
            params.append(coerce_event_type(event_type).value)
        if since:
            sql += " AND timestamp >= ?"
            params.append(to_iso(since))
        sql += " ORDER BY event_id ASC LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        return [Event.from_row(r) for r in self.db.fetchall(sql, params)]
