"""
Security helpers for password hashing and token authentication.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random salt.
Sessions are opaque random tokens stored on the user row; a request is
authenticated by looking up the user whose stored token equals the one
presented in the ``Authorization`` header.  Nothing about the session
is kept in process memory, so a token stops working as soon as it is
cleared or replaced in the database.
"""

import hashlib
import hmac
import logging
import os
import uuid
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader

from .db import get_connection
from .errors import UnauthorizedError

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000

# ``auto_error`` is disabled so a missing header produces our own 401
# envelope instead of FastAPI's 403.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Returns the salt and hash in hex separated by ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a plain password against a stored ``salt$hash`` string.

    Malformed stored values never match.
    """
    if not hashed_password or "$" not in hashed_password:
        return False
    salt_hex, hash_hex = hashed_password.split("$", 1)
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def generate_token() -> str:
    """Return a new opaque session token."""
    return str(uuid.uuid4())


def extract_token(header_value: Optional[str]) -> Optional[str]:
    """Pull the token out of an ``Authorization`` header value.

    Both ``<token>`` and ``Bearer <token>`` are accepted.  Returns
    ``None`` for a missing or blank header.
    """
    if not header_value:
        return None
    value = header_value.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


def get_current_user(authorization: Optional[str] = Depends(authorization_header)) -> Dict[str, Any]:
    """Dependency that resolves the authenticated user.

    Returns a dict with ``id``, ``username`` and ``name`` of the user
    whose stored token matches the request.  Raises
    ``UnauthorizedError`` when the header is absent or no user holds
    the token.
    """
    token = extract_token(authorization)
    if token is None:
        raise UnauthorizedError("Unauthorized")
    conn = get_connection()
    try:
        row = conn.execute(
            "SELECT id, username, name FROM users WHERE token = ?",
            (token,),
        ).fetchone()
    finally:
        conn.close()
    if not row:
        logger.warning("Rejected request with unknown token")
        raise UnauthorizedError("Unauthorized")
    return dict(row)
