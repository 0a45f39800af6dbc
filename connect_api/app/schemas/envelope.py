"""
The response envelope shared by every action.

Every response, success or failure, is ``{"success": bool,
"message": str?, ...}`` where the extra keys depend on the action
(``user``, ``posts``, ``isLiked``).
"""

from typing import Optional

from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool
    message: Optional[str] = None

    model_config = {"extra": "allow"}

    def render(self) -> dict:
        data = self.model_dump()
        if data.get("message") is None:
            data.pop("message", None)
        return data


def success(message: Optional[str] = None, **extras) -> Envelope:
    return Envelope(success=True, message=message, **extras)


def failure(message: str) -> Envelope:
    return Envelope(success=False, message=message)
