"""Shared SQLite helpers: WAL mode, foreign keys, row_factory defaults."""

import sqlite3
from pathlib import Path


def wal_connect(
    db_path: str | Path,
    row_factory: bool = True,
    check_same_thread: bool = False,
) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode and foreign keys enforced.

    The connection is in autocommit mode (``isolation_level=None``); callers
    open their own transactions with ``BEGIN IMMEDIATE``.

    Args:
        db_path: Path to database file, or ":memory:".
        row_factory: If True, set conn.row_factory = sqlite3.Row.
        check_same_thread: Passed to sqlite3.connect. The ledger serializes
            access with its own lock, so it shares one connection across threads.
    """
    conn = sqlite3.connect(
        str(db_path),
        isolation_level=None,
        check_same_thread=check_same_thread,
    )
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
    except sqlite3.Error:
        conn.close()
        raise
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn
