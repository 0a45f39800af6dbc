"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a per‑request FastAPI dependency (``get_db``)
and the schema initialisation routine (``init_db``) that the
application runs once at startup.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order, so running
``init_db`` against an already initialised store is a no‑op.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

from .config import settings
from .exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS posts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            content TEXT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS post_likes (
            user_id INTEGER NOT NULL,
            post_id INTEGER NOT NULL,
            PRIMARY KEY (user_id, post_id),
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY (post_id) REFERENCES posts(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: job title shown next to the author of a post.  Stores
    # created by the first deployment already carry this column.
    (
        2,
        """
        ALTER TABLE users ADD COLUMN job_title TEXT DEFAULT 'ConnectApp User';
        """,
    ),
    # Migration 3: the feed is always read newest first
    (
        3,
        """
        CREATE INDEX IF NOT EXISTS idx_posts_created_at ON posts(created_at);
        CREATE INDEX IF NOT EXISTS idx_post_likes_post_id ON post_likes(post_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection; SQLite leaves it off by default, and the cascades
    from users to posts to likes depend on it.

    ``get_db`` opens the connection in a threadpool worker while the
    endpoint runs on the event loop, so the same‑thread check is off.
    A connection still belongs to exactly one request.
    """
    conn = sqlite3.connect(get_database_path(), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding one connection per request.

    A failure to open the connection is fatal for the request and is
    reported as ``DatabaseUnavailableError`` before any action is
    dispatched.
    """
    try:
        conn = get_connection()
    except sqlite3.Error as exc:
        logger.exception("Could not open database at %s", get_database_path())
        raise DatabaseUnavailableError() from exc
    try:
        yield conn
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entry of
    ``MIGRATIONS``.  Adding a column that an older deployment already
    created raises "duplicate column name"; that error is expected and
    the migration is recorded as applied.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version <= current_version:
                continue
            try:
                cursor.executescript(sql)
            except sqlite3.OperationalError as exc:
                if "duplicate column name" not in str(exc):
                    raise
                logger.debug("Migration %s already present: %s", version, exc)
            cursor.execute(
                "INSERT OR IGNORE INTO migrations (version) VALUES (?)", (version,)
            )
            logger.info("Applied migration %s", version)
            current_version = version
