"""
Password hashing helpers.

Passwords are digested with PBKDF2‑HMAC‑SHA256 and a 16‑byte random
salt.  The stored string has the form ``<iterations>$<salt>$<hash>``
(salt and hash in hex) so the work factor can be raised later without
invalidating existing accounts.  Verification recomputes the digest
with the stored salt and iteration count and compares in constant
time.
"""

import hashlib
import hmac
import os
from typing import Optional

from .config import settings


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    iterations : Optional[int]
        PBKDF2 iteration count.  Defaults to
        ``settings.password_hash_iterations``.

    Returns
    -------
    str
        Iterations, salt and hash joined with ``$``.
    """
    iterations = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = _derive(password, salt, iterations)
    return f"{iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored digest string.

    Returns ``False`` for a mismatch and for stored values that are not
    in the ``iterations$salt$hash`` format.
    """
    try:
        iterations_str, salt_hex, hash_hex = hashed_password.split("$", 2)
        iterations = int(iterations_str)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    if iterations < 1:
        return False
    dk = _derive(plain_password, salt, iterations)
    return hmac.compare_digest(dk, stored_hash)
