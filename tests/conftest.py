"""Shared fixtures for dbsampler tests."""

from __future__ import annotations

import sqlite3
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture
def scenario_sqlite_db() -> Generator[Path, None, None]:
    """SQLite database with t(id, name) holding a value, an empty string and a NULL."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute("CREATE TABLE t (id INTEGER, name TEXT)")
    cursor.executemany(
        "INSERT INTO t (id, name) VALUES (?, ?)",
        [(1, "a"), (2, ""), (3, None)],
    )

    # AUTOINCREMENT creates the internal sqlite_sequence table
    cursor.execute(
        "CREATE TABLE counters (id INTEGER PRIMARY KEY AUTOINCREMENT, label TEXT)"
    )
    cursor.execute("INSERT INTO counters (label) VALUES ('first')")

    # Names that only work when quoted
    cursor.execute('CREATE TABLE "order" ("select" TEXT)')
    cursor.execute("INSERT INTO \"order\" (\"select\") VALUES ('kept')")
    cursor.execute('CREATE TABLE "odd ""name""" (value TEXT)')
    cursor.execute("INSERT INTO \"odd \"\"name\"\"\" (value) VALUES ('x')")

    # Views are not tables
    cursor.execute("CREATE VIEW t_view AS SELECT id FROM t")

    conn.commit()
    conn.close()

    yield db_path

    db_path.unlink(missing_ok=True)
