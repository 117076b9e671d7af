"""LedgerStore owns the SQLite connection, schema and transactions."""

import sqlite3
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import structlog

from db import wal_connect
from shared_types import EventType

from .errors import (
    AlreadyInitializedError,
    NotOpenError,
    StorageFailureError,
    StorageUnavailableError,
)
from .events import EventLog
from .models import to_iso, utc_now
from .schema import SCHEMA_STATEMENTS, TABLES

logger = structlog.get_logger()

MEMORY = ":memory:"


class LedgerStore:
    """Single connection to the ledger database.

    One instance is created per database and handed to every repository.
    All statements run under a reentrant lock, so the store can be shared by
    threads of one process; read-then-write operations wrap themselves in
    ``transaction()``.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._conn: Optional[sqlite3.Connection] = None
        self._location: Optional[str] = None
        self._lock = threading.RLock()
        self._depth = 0
        self._clock = clock or utc_now

    @property
    def location(self) -> Optional[str]:
        return self._location

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise NotOpenError()
        return self._conn

    def open(self, location: str | Path = MEMORY) -> None:
        """Connect to a database file (created if missing) or ":memory:"."""
        target = str(location)
        with self._lock:
            if self._conn is not None:
                self.close()
            try:
                if target != MEMORY:
                    path = Path(target).expanduser()
                    path.parent.mkdir(parents=True, exist_ok=True)
                    target = str(path)
                conn = wal_connect(target)
            except (OSError, sqlite3.Error) as e:
                raise StorageUnavailableError(target, str(e)) from e
            self._conn = conn
            self._location = target
            self._depth = 0
        logger.debug("ledger_opened", location=target)

    def initialize(self) -> None:
        """Create tables and indexes, then record DB_INITIALIZED.

        Raises AlreadyInitializedError if the schema already exists.
        """
        with self._lock:
            if self.is_initialized():
                raise AlreadyInitializedError()
            with self.transaction() as conn:
                for statement in SCHEMA_STATEMENTS:
                    conn.execute(statement)
                now = self.now()
                EventLog(self).append(EventType.DB_INITIALIZED, {"initialized_at": now})
        logger.info("ledger_initialized", location=self._location)

    def is_initialized(self) -> bool:
        """True when every ledger table exists. Never raises."""
        with self._lock:
            if self._conn is None:
                return False
            try:
                placeholders = ",".join("?" for _ in TABLES)
                rows = self._conn.execute(
                    f"SELECT name FROM sqlite_master WHERE type = 'table' AND name IN ({placeholders})",
                    TABLES,
                ).fetchall()
            except sqlite3.Error:
                return False
            return len(rows) == len(TABLES)

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                self._depth = 0
                logger.debug("ledger_closed", location=self._location)

    def now(self) -> str:
        return to_iso(self._clock())

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """One atomic unit of work. Nested calls join the outer transaction."""
        with self._lock:
            conn = self.connection
            if self._depth:
                self._depth += 1
                try:
                    yield conn
                finally:
                    self._depth -= 1
                return

            self._depth = 1
            try:
                conn.execute("BEGIN IMMEDIATE")
                yield conn
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                _rollback(conn)
                raise StorageFailureError(str(e)) from e
            except BaseException:
                _rollback(conn)
                raise
            finally:
                self._depth = 0

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        with self._lock:
            try:
                return self.connection.execute(sql, params)
            except sqlite3.Error as e:
                raise StorageFailureError(str(e)) from e

    def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        with self._lock:
            try:
                return self.connection.execute(sql, params).fetchone()
            except sqlite3.Error as e:
                raise StorageFailureError(str(e)) from e

    def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        with self._lock:
            try:
                return self.connection.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StorageFailureError(str(e)) from e

    def counts(self) -> dict[str, int]:
        """Row count per ledger table."""
        return {table: self.fetchone(f"SELECT COUNT(*) FROM {table}")[0] for table in TABLES}


def _rollback(conn: sqlite3.Connection) -> None:
    if conn.in_transaction:
        conn.execute("ROLLBACK")
