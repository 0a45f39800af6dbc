"""
Business logic for likes.

A like is membership of ``(user_id, post_id)`` in ``post_likes``.  A
toggle deletes the pair and, when nothing was deleted, inserts it.
Both statements run in one transaction; the ``DELETE`` already takes
SQLite's write lock, so two toggles of the same pair cannot interleave.
"""

import logging
import sqlite3
from typing import Optional

from connect_api.app.core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


class LikeService:
    """Service for liking and unliking posts."""

    @classmethod
    async def toggle_like(
        cls, conn: sqlite3.Connection, post_id: Optional[int], user_id: Optional[int]
    ) -> bool:
        """Flip the like of ``user_id`` on ``post_id``.

        Returns the resulting state: ``True`` when the post is now
        liked, ``False`` when the like was removed.  Liking a post or
        as a user that does not exist fails the foreign key check and
        raises ``StorageError``.
        """
        if not post_id or not user_id:
            raise ValidationError("Post ID and User ID are required.")

        try:
            cursor = conn.execute(
                "DELETE FROM post_likes WHERE post_id = ? AND user_id = ?",
                (post_id, user_id),
            )
            is_liked = cursor.rowcount == 0
            if is_liked:
                conn.execute(
                    "INSERT INTO post_likes (post_id, user_id) VALUES (?, ?)",
                    (post_id, user_id),
                )
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Toggling like of user %s on post %s failed", user_id, post_id)
            raise StorageError("Like action failed.") from exc

        logger.info(
            "User %s %s post %s", user_id, "liked" if is_liked else "unliked", post_id
        )
        return is_liked
