import sqlite3

import pytest

from connect_api.app.core import db
from connect_api.app.core.db import MIGRATIONS


def _columns(conn, table):
    return [row["name"] for row in conn.execute(f"PRAGMA table_info({table})")]


def test_init_creates_schema(conn):
    tables = {
        row["name"]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    }
    assert {"users", "posts", "post_likes", "migrations"} <= tables
    assert "job_title" in _columns(conn, "users")
    versions = [row["version"] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
    assert versions == [version for version, _ in MIGRATIONS]


def test_init_is_idempotent(conn):
    conn.execute(
        "INSERT INTO users (name, email, password_hash) VALUES ('Ann', 'ann@x.com', 'h')"
    )
    conn.commit()
    db.init_db()
    db.init_db()
    assert conn.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 1
    assert conn.execute("SELECT COUNT(*) FROM migrations").fetchone()[0] == len(MIGRATIONS)


def test_init_tolerates_store_that_already_has_job_title(temp_db):
    legacy = sqlite3.connect(temp_db)
    legacy.executescript(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            job_title TEXT DEFAULT 'ConnectApp User'
        );
        INSERT INTO users (name, email, password_hash, job_title)
        VALUES ('Ann', 'ann@x.com', 'h', 'Designer');
        """
    )
    legacy.close()

    db.init_db()

    conn = db.get_connection()
    try:
        row = conn.execute("SELECT job_title FROM users WHERE email = 'ann@x.com'").fetchone()
        assert row["job_title"] == "Designer"
        assert _columns(conn, "users").count("job_title") == 1
        assert conn.execute("SELECT MAX(version) FROM migrations").fetchone()[0] == MIGRATIONS[-1][0]
    finally:
        conn.close()


def test_default_job_title(conn):
    conn.execute("INSERT INTO users (name, email, password_hash) VALUES ('Bo', 'bo@x.com', 'h')")
    row = conn.execute("SELECT job_title FROM users WHERE email = 'bo@x.com'").fetchone()
    assert row["job_title"] == "ConnectApp User"


def test_email_is_unique(conn):
    conn.execute("INSERT INTO users (name, email, password_hash) VALUES ('A', 'a@x.com', 'h')")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO users (name, email, password_hash) VALUES ('B', 'a@x.com', 'h')")


def test_like_pair_is_unique(conn):
    conn.execute("INSERT INTO users (id, name, email, password_hash) VALUES (1, 'A', 'a@x.com', 'h')")
    conn.execute("INSERT INTO posts (id, user_id, content) VALUES (1, 1, 'hi')")
    conn.execute("INSERT INTO post_likes (user_id, post_id) VALUES (1, 1)")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO post_likes (user_id, post_id) VALUES (1, 1)")


def test_deleting_user_cascades_to_posts_and_likes(conn):
    conn.execute("INSERT INTO users (id, name, email, password_hash) VALUES (1, 'A', 'a@x.com', 'h')")
    conn.execute("INSERT INTO users (id, name, email, password_hash) VALUES (2, 'B', 'b@x.com', 'h')")
    conn.execute("INSERT INTO posts (id, user_id, content) VALUES (1, 1, 'by a')")
    conn.execute("INSERT INTO posts (id, user_id, content) VALUES (2, 2, 'by b')")
    conn.execute("INSERT INTO post_likes (user_id, post_id) VALUES (2, 1)")
    conn.execute("INSERT INTO post_likes (user_id, post_id) VALUES (1, 2)")
    conn.commit()

    conn.execute("DELETE FROM users WHERE id = 1")
    conn.commit()

    assert [row["id"] for row in conn.execute("SELECT id FROM posts")] == [2]
    assert conn.execute("SELECT COUNT(*) FROM post_likes").fetchone()[0] == 0


def test_posts_require_existing_user(conn):
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO posts (user_id, content) VALUES (42, 'orphan')")


def test_get_database_path_resolves_relative_paths(monkeypatch):
    monkeypatch.setattr(db.settings, "database_url", "some.sqlite")
    path = db.get_database_path()
    assert path.endswith("some.sqlite")
    assert path != "some.sqlite"
