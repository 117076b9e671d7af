"""CLI command modules."""

from .database import db
from .inputs import inputs
from .links import links
from .notes import notes
from .reconcile import events, reconcile

__all__ = [
    "db",
    "inputs",
    "notes",
    "links",
    "reconcile",
    "events",
]
