"""
Business logic for posts and the feed.

``PostService`` creates posts, returns the feed with like aggregates
for a given viewer and deletes posts.  Deletion folds the ownership
check into the ``DELETE`` predicate, so there is no window between
checking the owner and removing the row.  Likes of a deleted post go
away through the ``ON DELETE CASCADE`` rule of ``post_likes``.
"""

import logging
import sqlite3
from typing import List, Optional

from connect_api.app.core.exceptions import (
    ForbiddenOrNotFoundError,
    StorageError,
    ValidationError,
)
from connect_api.app.schemas.post import PostRead

logger = logging.getLogger(__name__)


FEED_QUERY = """
    SELECT
        p.id, p.user_id, p.content, p.created_at,
        u.name AS user_name, u.job_title,
        (SELECT COUNT(*) FROM post_likes l WHERE l.post_id = p.id) AS like_count,
        EXISTS(
            SELECT 1 FROM post_likes l WHERE l.post_id = p.id AND l.user_id = :viewer
        ) AS is_liked
    FROM posts p
    JOIN users u ON p.user_id = u.id
    ORDER BY p.created_at DESC, p.id DESC
"""


class PostService:
    """Service for creating, listing and deleting posts."""

    @classmethod
    async def create_post(
        cls, conn: sqlite3.Connection, user_id: Optional[int], content: Optional[str]
    ) -> int:
        """Create a post owned by ``user_id`` and return its id.

        The caller‑supplied user id is trusted as is.  A user id that
        does not exist violates the foreign key and is reported as a
        storage failure.
        """
        if not user_id or content is None or not content.strip():
            raise ValidationError("User ID and content are required.")

        try:
            cursor = conn.execute(
                "INSERT INTO posts (user_id, content) VALUES (?, ?)",
                (user_id, content.strip()),
            )
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Post creation failed for user %s", user_id)
            raise StorageError("Post creation failed.") from exc

        logger.info("User %s created post %s", user_id, cursor.lastrowid)
        return cursor.lastrowid

    @classmethod
    async def list_posts(
        cls, conn: sqlite3.Connection, viewer_user_id: Optional[int] = None
    ) -> List[PostRead]:
        """Return every post, newest first.

        Each post carries its author's name and job title, the number
        of likes and whether ``viewer_user_id`` is among the likers.
        Without a viewer no post is marked as liked.  Posts created in
        the same second are ordered by id, newest first.
        """
        try:
            rows = conn.execute(FEED_QUERY, {"viewer": viewer_user_id or 0}).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Fetching the feed failed")
            raise StorageError("Failed to fetch posts.") from exc

        return [
            PostRead(
                id=row["id"],
                user_id=row["user_id"],
                content=row["content"],
                created_at=str(row["created_at"]),
                user_name=row["user_name"],
                job_title=row["job_title"],
                like_count=row["like_count"],
                is_liked=bool(row["is_liked"]),
            )
            for row in rows
        ]

    @classmethod
    async def delete_post(
        cls, conn: sqlite3.Connection, post_id: Optional[int], requester_user_id: Optional[int]
    ) -> None:
        """Delete a post if, and only if, ``requester_user_id`` owns it.

        A missing post and a post owned by someone else raise the same
        ``ForbiddenOrNotFoundError``.
        """
        if not post_id or not requester_user_id:
            raise ValidationError("Post ID and User ID are required.")

        try:
            cursor = conn.execute(
                "DELETE FROM posts WHERE id = ? AND user_id = ?",
                (post_id, requester_user_id),
            )
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Deleting post %s failed", post_id)
            raise StorageError("Deletion failed due to a database error.") from exc

        if cursor.rowcount == 0:
            logger.info("User %s may not delete post %s", requester_user_id, post_id)
            raise ForbiddenOrNotFoundError()
        logger.info("User %s deleted post %s", requester_user_id, post_id)
