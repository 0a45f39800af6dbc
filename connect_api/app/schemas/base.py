"""
Base model for action request bodies.

Request bodies come straight from the client, so decoding is lenient
about scalars (a numeric ``password`` or ``content`` becomes a string)
and strict about what SQLite and PBKDF2 cannot take: ids outside the
signed 64‑bit range and strings that are not valid UTF‑8 (lone
surrogates from ``\\ud800``‑style JSON escapes) fail validation.
"""

from typing import Any

from pydantic import BaseModel, field_validator

# SQLite INTEGER is a signed 64‑bit value
MAX_ID = 2**63 - 1


class ActionRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    @field_validator("*")
    @classmethod
    def ensure_utf8(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                value.encode("utf-8")
            except UnicodeEncodeError:
                raise ValueError("text must be valid UTF-8")
        return value
