"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and a cursor context manager for one-shot statements.
Each collection of the store (genres, customers, movies, rentals,
users) is a table; embedded snapshots such as a rental's customer are
flattened into prefixed columns of the owning table.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings

# Largest value SQLite can store in an INTEGER PRIMARY KEY.
MAX_ROW_ID = 2**63 - 1


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS genres (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS customers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            is_gold INTEGER NOT NULL DEFAULT 0
        );

        -- genre_id/genre_name are a snapshot of the genre at write time,
        -- not a foreign key.
        CREATE TABLE IF NOT EXISTS movies (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            genre_id INTEGER NOT NULL,
            genre_name TEXT NOT NULL,
            number_in_stock INTEGER NOT NULL DEFAULT 0 CHECK (number_in_stock >= 0),
            daily_rental_rate REAL NOT NULL DEFAULT 0
        );

        -- customer_* and movie_* columns are immutable snapshots taken when
        -- the rental is created.
        CREATE TABLE IF NOT EXISTS rentals (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_id INTEGER NOT NULL,
            customer_name TEXT NOT NULL,
            movie_id INTEGER NOT NULL,
            movie_title TEXT NOT NULL,
            movie_daily_rental_rate REAL NOT NULL,
            date_out TIMESTAMP NOT NULL,
            date_returned TIMESTAMP,
            rental_fee REAL
        );

        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            is_admin INTEGER NOT NULL DEFAULT 0
        );
        """,
    ),
    # Migration 2: indices for the default sort orders and stock lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_rentals_date_out ON rentals(date_out);
        CREATE INDEX IF NOT EXISTS idx_rentals_movie_id ON rentals(movie_id);
        CREATE INDEX IF NOT EXISTS idx_movies_title ON movies(title);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # vidly_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  ``settings.db_timeout`` bounds how long a statement waits for
    another connection's write lock before raising
    ``sqlite3.OperationalError``.
    """
    conn = sqlite3.connect(get_database_path(), timeout=settings.db_timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits, and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def parse_id(raw: str) -> Optional[int]:
    """Convert a path parameter into a row id.

    Returns ``None`` for anything that cannot be an id of a stored
    record, so callers answer with 404 instead of a validation error.
    """
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    if value < 1 or value > MAX_ROW_ID:
        return None
    return value


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  New migrations must be appended with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
