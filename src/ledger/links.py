"""Provenance edges between inputs and notes, plus reconciliation joins."""

from typing import TYPE_CHECKING

from shared_types import EventType

from .events import EventLog
from .inputs import InputStore
from .models import Input, Link, LinkResult, Note
from .notes import NoteStore

if TYPE_CHECKING:
    from .store import LedgerStore


class LinkStore:
    """Owns the links relation over inputs and notes it does not own.

    InputStore and NoteStore are used only to check that endpoints exist.
    A link outlives redaction of its input.
    """

    def __init__(self, db: "LedgerStore", events: EventLog, inputs: InputStore, notes: NoteStore):
        self.db = db
        self.events = events
        self.inputs = inputs
        self.notes = notes

    def add(self, input_id: str, note_id: str) -> LinkResult:
        """Link an input to a note. Returns (link, created); re-adding is a no-op.

        Raises NotFoundError for a missing input (checked first) or note.
        """
        with self.db.transaction():
            self.inputs.get_by_id(input_id)
            self.notes.get_by_id(note_id)

            row = self.db.fetchone(
                "SELECT * FROM links WHERE input_id = ? AND note_id = ?", (input_id, note_id)
            )
            if row:
                return LinkResult(Link.from_row(row), False)

            now = self.db.now()
            self.db.execute(
                "INSERT INTO links (input_id, note_id, created_at) VALUES (?, ?, ?)",
                (input_id, note_id, now),
            )
            self.events.append(EventType.LINK_ADDED, {"input_id": input_id, "note_id": note_id})

        return LinkResult(Link(input_id=input_id, note_id=note_id, created_at=now), True)

    def remove(self, input_id: str, note_id: str) -> bool:
        """Delete a link if present. Endpoints are not validated."""
        with self.db.transaction():
            cursor = self.db.execute(
                "DELETE FROM links WHERE input_id = ? AND note_id = ?", (input_id, note_id)
            )
            if cursor.rowcount == 0:
                return False
            self.events.append(EventType.LINK_REMOVED, {"input_id": input_id, "note_id": note_id})
        return True

    def get_sources_for_note(self, note_id: str) -> list[Input]:
        """Inputs linked to a note, redacted ones included, in link order."""
        rows = self.db.fetchall(
            """SELECT i.* FROM inputs i
               JOIN links l ON i.input_id = l.input_id
               WHERE l.note_id = ?
               ORDER BY l.created_at ASC, l.rowid ASC""",
            (note_id,),
        )
        return [Input.from_row(r) for r in rows]

    def get_notes_for_input(self, input_id: str) -> list[Note]:
        rows = self.db.fetchall(
            """SELECT n.* FROM notes n
               JOIN links l ON n.note_id = l.note_id
               WHERE l.input_id = ?
               ORDER BY l.created_at ASC, l.rowid ASC""",
            (input_id,),
        )
        return [Note.from_row(r) for r in rows]

    def get_input_ids_for_note(self, note_id: str) -> list[str]:
        rows = self.db.fetchall(
            "SELECT input_id FROM links WHERE note_id = ? ORDER BY created_at ASC, rowid ASC",
            (note_id,),
        )
        return [r["input_id"] for r in rows]

    def find_orphaned_inputs(self) -> list[Input]:
        """Inputs with no current link to any note."""
        rows = self.db.fetchall(
            """SELECT i.* FROM inputs i
               LEFT JOIN links l ON i.input_id = l.input_id
               WHERE l.note_id IS NULL
               ORDER BY i.created_at ASC, i.rowid ASC"""
        )
        return [Input.from_row(r) for r in rows]
