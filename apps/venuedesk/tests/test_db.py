import sqlite3

import pytest

from venuedesk.db import Database, unique_violation
from venuedesk.errors import ConflictError, StoreUnavailableError


def test_runner_slots_are_bounded(tmp_path):
    database = Database(str(tmp_path / "bounded.db"), max_connections=1, connect_timeout=0.05)
    database.init_schema()

    with database.runner():
        with pytest.raises(StoreUnavailableError):
            with database.runner():
                pass

    with database.runner() as runner:
        assert runner is not None


def test_slot_is_released_after_an_error(tmp_path):
    database = Database(str(tmp_path / "release.db"), max_connections=1, connect_timeout=0.05)

    with pytest.raises(RuntimeError):
        with database.runner():
            raise RuntimeError("boom")

    with database.runner() as runner:
        assert runner is not None


def test_init_schema_is_idempotent(tmp_path):
    database = Database(str(tmp_path / "nested" / "schema.db"))

    database.init_schema()
    database.init_schema()

    conn = sqlite3.connect(str(tmp_path / "nested" / "schema.db"))
    try:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    finally:
        conn.close()
    assert {"users", "artists", "events", "event_bookings", "event_images"} <= tables


def test_unique_violation_maps_to_conflict():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE t (name TEXT NOT NULL UNIQUE)")
    conn.execute("INSERT INTO t (name) VALUES ('a')")

    with pytest.raises(ConflictError, match="Name taken"):
        with unique_violation("Name taken"):
            conn.execute("INSERT INTO t (name) VALUES ('a')")

    with pytest.raises(sqlite3.IntegrityError):
        with unique_violation("Name taken"):
            conn.execute("INSERT INTO t (name) VALUES (NULL)")
    conn.close()
