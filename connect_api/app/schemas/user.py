"""
Pydantic models for account data.

``SignupRequest`` and ``LoginRequest`` are the decoded bodies of the
``signup`` and ``login`` actions.  Their fields are optional at the
schema level: emptiness is checked by ``UserService`` so that a
missing field produces the same validation message as a blank one.
``UserRead`` is the identity payload returned after a successful
login; it never carries the password digest.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .base import ActionRequest


class SignupRequest(ActionRequest):
    name: Optional[str] = Field(None, examples=["Ann"])
    email: Optional[str] = Field(None, examples=["ann@example.com"])
    password: Optional[str] = Field(None, examples=["pw123"])
    job_title: Optional[str] = Field(None, examples=["Engineer"])


class LoginRequest(ActionRequest):
    email: Optional[str] = Field(None, examples=["ann@example.com"])
    password: Optional[str] = Field(None, examples=["pw123"])


class UserRead(BaseModel):
    """Identity payload of a user."""

    id: int
    name: str
    email: str
    job_title: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
