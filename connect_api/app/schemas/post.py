"""
Pydantic models for posts and likes.

Request bodies use the camelCase keys of the public API (``userId``,
``postId``, ``currentUserId``); numeric strings are accepted for ids, and
ids must fit SQLite's 64‑bit INTEGER.
``PostRead`` is one entry of the feed returned by ``getPosts``.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .base import MAX_ID, ActionRequest


class CreatePostRequest(ActionRequest):
    user_id: Optional[int] = Field(None, alias="userId", ge=0, le=MAX_ID, examples=[1])
    content: Optional[str] = Field(None, examples=["hello"])


class GetPostsRequest(ActionRequest):
    current_user_id: Optional[int] = Field(None, alias="currentUserId", ge=0, le=MAX_ID, examples=[1])


class PostActionRequest(ActionRequest):
    """Body shared by ``toggleLike`` and ``deletePost``."""

    post_id: Optional[int] = Field(None, alias="postId", ge=0, le=MAX_ID, examples=[1])
    user_id: Optional[int] = Field(None, alias="userId", ge=0, le=MAX_ID, examples=[1])


class PostRead(BaseModel):
    """A post as shown in the feed, with author and like aggregates."""

    id: int
    user_id: int
    content: str
    created_at: str
    user_name: str
    job_title: Optional[str] = None
    like_count: int = 0
    is_liked: bool = False

    model_config = {
        "from_attributes": True,
    }
