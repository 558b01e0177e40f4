"""
SQLite storage bootstrap.

This module provides functions for obtaining a connection to the
record store (``get_connection``) and for creating the ``creatures``
collection together with its unique indexes (``init_db``).  The store
is treated as a document collection: one row per creature, keyed by an
opaque identifier assigned on insert, with uniqueness enforced on both
``name`` and ``no`` by the database itself.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

SCHEMA = """
CREATE TABLE IF NOT EXISTS creatures (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    no INTEGER NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS creatures_name_unique ON creatures (name);
CREATE UNIQUE INDEX IF NOT EXISTS creatures_no_unique ON creatures (no);
"""


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as given.  Relative ones are resolved
    against the project root (the directory holding the package).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def get_connection(database_url: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.
    """
    conn = sqlite3.connect(get_database_path(database_url))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_url: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(database_url)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(database_url: str) -> None:
    """Create the ``creatures`` collection and its unique indexes.

    Safe to call on every start; existing data is left untouched.
    """
    with get_cursor(database_url) as cursor:
        cursor.executescript(SCHEMA)
