from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlstratum.runner import Runner

from venuedesk.errors import ConflictError, StoreUnavailableError
from venuedesk.schema import SCHEMA_SQL

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value
MAX_ROW_ID = 2**63 - 1


def is_row_id(value: int) -> bool:
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


def _connect(db_path: str, timeout: float) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path, timeout=timeout, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


class Database:
    """Hands out runners over at most ``max_connections`` open connections."""

    def __init__(self, db_path: str, max_connections: int = 20, connect_timeout: float = 5.0) -> None:
        self.db_path = Path(db_path)
        self.max_connections = max_connections
        self.connect_timeout = connect_timeout
        self._slots = threading.BoundedSemaphore(max_connections)

    @contextmanager
    def runner(self) -> Iterator[Runner]:
        if not self._slots.acquire(timeout=self.connect_timeout):
            logger.error("No database connection available after %.1fs", self.connect_timeout)
            raise StoreUnavailableError()
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = _connect(str(self.db_path), self.connect_timeout)
            try:
                yield Runner(conn)
            finally:
                conn.close()
        finally:
            self._slots.release()

    def init_schema(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = _connect(str(self.db_path), self.connect_timeout)
        try:
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        finally:
            conn.close()


def _is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    return exc.sqlite_errorname in {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}


@contextmanager
def unique_violation(message: str) -> Iterator[None]:
    """Translate a UNIQUE integrity failure inside the block into ConflictError."""
    try:
        yield
    except sqlite3.IntegrityError as exc:
        if _is_unique_violation(exc):
            raise ConflictError(message) from exc
        raise
