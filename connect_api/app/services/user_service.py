"""
Business logic for accounts.

``UserService`` registers users and verifies credentials against the
``users`` table.  Emails are stored lowercased so that the storage
level uniqueness constraint is case insensitive.  Duplicate emails are
detected from the constraint violation itself rather than from a
lookup before the insert, which would race with a concurrent signup.
"""

import logging
import sqlite3
from functools import lru_cache
from typing import Optional

from connect_api.app.core.config import settings
from connect_api.app.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    StorageError,
    ValidationError,
)
from connect_api.app.core.security import hash_password, verify_password
from connect_api.app.schemas.user import UserRead

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Verified against when the email is unknown so both failure paths
    # cost one PBKDF2 derivation.
    return hash_password("connect-app-dummy-password")


class UserService:
    """Service for registering and authenticating users."""

    @classmethod
    async def register(
        cls,
        conn: sqlite3.Connection,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        job_title: Optional[str] = None,
    ) -> int:
        """Create a new user and return its id.

        Name, email and password must be non‑empty after trimming.  The
        email is lowercased, name and job title are trimmed, and an
        empty or missing job title is replaced by
        ``settings.default_job_title``.  Only the PBKDF2 digest of the
        password is stored.

        Raises
        ------
        ValidationError
            A required field is missing or blank.
        DuplicateEmailError
            The (lowercased) email is already registered.
        StorageError
            Any other database failure.
        """
        if _is_blank(name) or _is_blank(email) or _is_blank(password):
            raise ValidationError("All fields are required.")

        name = name.strip()
        email = email.strip().lower()
        job_title = (job_title or "").strip() or settings.default_job_title
        password_hash = hash_password(password)

        try:
            cursor = conn.execute(
                "INSERT INTO users (name, email, password_hash, job_title) VALUES (?, ?, ?, ?)",
                (name, email, password_hash, job_title),
            )
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            logger.info("Signup rejected, email %s already registered", email)
            raise DuplicateEmailError()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Signup failed for %s", email)
            raise StorageError("Signup failed due to a database error.") from exc

        user_id = cursor.lastrowid
        logger.info("Registered user %s (id=%s)", email, user_id)
        return user_id

    @classmethod
    async def login(
        cls,
        conn: sqlite3.Connection,
        email: Optional[str],
        password: Optional[str],
    ) -> UserRead:
        """Authenticate a user by email and password.

        Returns the identity payload on success.  An unknown email and
        a wrong password both raise ``InvalidCredentialsError`` with the
        same message.
        """
        if _is_blank(email) or _is_blank(password):
            raise ValidationError("Email and password are required.")

        email = email.strip().lower()
        try:
            row = conn.execute(
                "SELECT id, name, email, password_hash, job_title FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Login lookup failed for %s", email)
            raise StorageError("Login failed due to a database error.") from exc

        if row is None:
            verify_password(password, _dummy_hash())
            logger.info("Failed login for %s", email)
            raise InvalidCredentialsError()
        if not verify_password(password, row["password_hash"]):
            logger.info("Failed login for %s", email)
            raise InvalidCredentialsError()

        return UserRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            job_title=row["job_title"],
        )
