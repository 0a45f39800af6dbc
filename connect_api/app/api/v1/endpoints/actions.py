"""
The action endpoint for API v1.

Clients POST a JSON object with an ``action`` discriminator and the
fields of that action.  The body is decoded into the pydantic model
registered for the action in ``ACTIONS`` and handed to exactly one
service operation.  Whatever happens, the client receives the
envelope ``{"success": ..., "message": ..., ...}``:

* service failures (``ConnectAppError`` raised by a service) keep
  HTTP 200;
* a body without a usable ``action``, an unknown action or a payload
  that does not fit its model answer with HTTP 400;
* a database that cannot be opened answers with HTTP 500 before any
  action runs (see ``core.db.get_db``).
"""

import json
import logging
import sqlite3
from typing import Any, Awaitable, Callable, Dict, Tuple, Type

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from connect_api.app.core.db import get_db
from connect_api.app.core.exceptions import (
    ConnectAppError,
    MalformedRequestError,
    UnknownActionError,
)
from connect_api.app.schemas.envelope import Envelope, failure, success
from connect_api.app.schemas.post import CreatePostRequest, GetPostsRequest, PostActionRequest
from connect_api.app.schemas.user import LoginRequest, SignupRequest
from connect_api.app.services.like_service import LikeService
from connect_api.app.services.post_service import PostService
from connect_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

Handler = Callable[[sqlite3.Connection, Any], Awaitable[Envelope]]


async def signup(conn: sqlite3.Connection, req: SignupRequest) -> Envelope:
    await UserService.register(conn, req.name, req.email, req.password, req.job_title)
    return success("User registered successfully.")


async def login(conn: sqlite3.Connection, req: LoginRequest) -> Envelope:
    user = await UserService.login(conn, req.email, req.password)
    return success("Login successful.", user=user.model_dump())


async def create_post(conn: sqlite3.Connection, req: CreatePostRequest) -> Envelope:
    await PostService.create_post(conn, req.user_id, req.content)
    return success("Post created successfully.")


async def get_posts(conn: sqlite3.Connection, req: GetPostsRequest) -> Envelope:
    posts = await PostService.list_posts(conn, req.current_user_id)
    return success("Posts fetched successfully.", posts=[p.model_dump() for p in posts])


async def toggle_like(conn: sqlite3.Connection, req: PostActionRequest) -> Envelope:
    is_liked = await LikeService.toggle_like(conn, req.post_id, req.user_id)
    return success("Post liked." if is_liked else "Post unliked.", isLiked=is_liked)


async def delete_post(conn: sqlite3.Connection, req: PostActionRequest) -> Envelope:
    await PostService.delete_post(conn, req.post_id, req.user_id)
    return success("Post deleted successfully.")


# action name -> (request model, handler)
ACTIONS: Dict[str, Tuple[Type[BaseModel], Handler]] = {
    "signup": (SignupRequest, signup),
    "login": (LoginRequest, login),
    "createPost": (CreatePostRequest, create_post),
    "getPosts": (GetPostsRequest, get_posts),
    "toggleLike": (PostActionRequest, toggle_like),
    "deletePost": (PostActionRequest, delete_post),
}


async def _read_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else None
    except (UnicodeDecodeError, ValueError):
        body = None
    if not isinstance(body, dict):
        raise MalformedRequestError()
    return body


async def dispatch(conn: sqlite3.Connection, body: Dict[str, Any]) -> Envelope:
    """Decode ``body`` for its action and run the matching handler."""
    action = body.get("action")
    if not isinstance(action, str):
        raise MalformedRequestError()
    try:
        model, handler = ACTIONS[action]
    except KeyError:
        logger.info("Rejected unknown action %r", action)
        raise UnknownActionError()
    try:
        req = model.model_validate(body)
    except PydanticValidationError as exc:
        logger.info("Malformed %s payload: %s", action, exc.errors())
        raise MalformedRequestError("Malformed request payload.")
    return await handler(conn, req)


@router.post("", summary="Run an action", response_model=Envelope)
async def run_action(request: Request, conn: sqlite3.Connection = Depends(get_db)) -> JSONResponse:
    """Dispatch one action and wrap its result in the envelope."""
    try:
        body = await _read_body(request)
        envelope = await dispatch(conn, body)
        status_code = 200
    except ConnectAppError as exc:
        envelope = failure(exc.message)
        status_code = exc.status_code
    return JSONResponse(status_code=status_code, content=envelope.render())
