"""Registered vault notes with first/last-seen tracking."""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from shared_types import EventType

from .errors import NotFoundError
from .events import EventLog
from .inputs import require_id
from .models import Note, encode_meta, merge_meta, to_iso

if TYPE_CHECKING:
    from .store import LedgerStore


class NoteStore:
    """Owns the notes table. Notes are never removed; deletion is a meta tombstone."""

    def __init__(self, db: "LedgerStore", events: EventLog):
        self.db = db
        self.events = events

    def register(self, note_id: str, meta: Optional[dict[str, Any]] = None) -> Note:
        """Record that a note was seen. Safe to call on every observation.

        The first call creates the note; later calls bump ``last_seen_at``
        (never backwards) and replace meta only when ``meta`` is given.
        """
        require_id("Note", note_id)
        meta_json = encode_meta(meta)

        with self.db.transaction():
            now = self.db.now()
            existing = self.find_by_id(note_id)

            if existing is None:
                self.db.execute(
                    "INSERT INTO notes (note_id, created_at, last_seen_at, meta_json) VALUES (?, ?, ?, ?)",
                    (note_id, now, now, meta_json),
                )
                self.events.append(EventType.NOTE_SEEN, {"note_id": note_id, "first_seen": True})
                return Note(note_id=note_id, created_at=now, last_seen_at=now, meta=meta)

            last_seen_at = max(existing.last_seen_at, now)
            self.db.execute(
                "UPDATE notes SET last_seen_at = ?, meta_json = COALESCE(?, meta_json) WHERE note_id = ?",
                (last_seen_at, meta_json, note_id),
            )
            self.events.append(EventType.NOTE_SEEN, {"note_id": note_id})

        existing.last_seen_at = last_seen_at
        if meta is not None:
            existing.meta = meta
        return existing

    def get_by_id(self, note_id: str) -> Note:
        found = self.find_by_id(note_id)
        if found is None:
            raise NotFoundError("Note", note_id)
        return found

    def find_by_id(self, note_id: str) -> Optional[Note]:
        row = self.db.fetchone("SELECT * FROM notes WHERE note_id = ?", (note_id,))
        return Note.from_row(row) if row else None

    def mark_deleted(self, note_id: str) -> Note:
        """Tombstone a note: merge {deleted, deleted_at} into its meta."""
        with self.db.transaction():
            note = self.get_by_id(note_id)
            note.meta = merge_meta(note.meta, {"deleted": True, "deleted_at": self.db.now()})
            self.db.execute(
                "UPDATE notes SET meta_json = ? WHERE note_id = ?",
                (encode_meta(note.meta), note_id),
            )
            self.events.append(EventType.NOTE_MARKED_DELETED, {"note_id": note_id})
        return note

    def find_stale(self, threshold: datetime | str) -> list[Note]:
        """Notes last seen strictly before ``threshold``, oldest first."""
        rows = self.db.fetchall(
            "SELECT * FROM notes WHERE last_seen_at < ? ORDER BY last_seen_at ASC, rowid ASC",
            (to_iso(threshold),),
        )
        return [Note.from_row(r) for r in rows]

    def find_unlinked(self) -> list[Note]:
        """Notes with no link to any input."""
        rows = self.db.fetchall(
            """SELECT n.* FROM notes n
               LEFT JOIN links l ON n.note_id = l.note_id
               WHERE l.input_id IS NULL
               ORDER BY n.created_at ASC, n.rowid ASC"""
        )
        return [Note.from_row(r) for r in rows]
