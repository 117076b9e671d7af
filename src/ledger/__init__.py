"""Provenance ledger: which inputs contributed to which vault notes."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Optional

from .errors import (
    AlreadyInitializedError,
    FileReadError,
    InvalidArgumentError,
    LedgerError,
    NotFoundError,
    NotInitializedError,
    NotOpenError,
    StorageFailureError,
    StorageUnavailableError,
)
from .events import EventLog
from .inputs import InputStore
from .links import LinkStore
from .models import Event, Input, Link, LinkResult, Note, StoreResult
from .notes import NoteStore
from .store import MEMORY, LedgerStore


def build_repositories(db: LedgerStore) -> dict:
    """Wire the repositories around one store. Keys: db, events, inputs, notes, links."""
    events = EventLog(db)
    inputs = InputStore(db, events)
    notes = NoteStore(db, events)
    links = LinkStore(db, events, inputs, notes)
    return {"db": db, "events": events, "inputs": inputs, "notes": notes, "links": links}


def open_ledger(
    location: str | Path = MEMORY,
    clock: Optional[Callable[[], datetime]] = None,
    initialize: bool = False,
) -> dict:
    """Open a store at ``location`` and return its repositories.

    With ``initialize=True`` the schema is created when missing.
    """
    db = LedgerStore(clock=clock)
    db.open(location)
    if initialize and not db.is_initialized():
        db.initialize()
    return build_repositories(db)


__all__ = [
    "LedgerStore",
    "EventLog",
    "InputStore",
    "NoteStore",
    "LinkStore",
    "Input",
    "Note",
    "Link",
    "Event",
    "StoreResult",
    "LinkResult",
    "LedgerError",
    "NotOpenError",
    "StorageUnavailableError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "NotFoundError",
    "InvalidArgumentError",
    "StorageFailureError",
    "FileReadError",
    "MEMORY",
    "build_repositories",
    "open_ledger",
]
