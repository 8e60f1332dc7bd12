"""
Business logic for users.

``UserService`` handles registration, login, profile edits, logout and
account removal.  Every operation validates its payload first and
raises a typed error from ``core.errors`` on failure; the API layer
never touches SQL directly.
"""

import logging
import sqlite3
from typing import Any, Dict

from contact_api.app.core.db import get_connection
from contact_api.app.core.errors import ConflictError, UnauthorizedError
from contact_api.app.core.security import generate_token, hash_password, verify_password
from contact_api.app.core.validation import validate
from contact_api.app.schemas.user import (
    LoginUserRequest,
    RegisterUserRequest,
    UpdateUserRequest,
    UserLoginRead,
    UserRead,
)

logger = logging.getLogger(__name__)


class UserService:
    """Service for user accounts and sessions.

    Sessions are a single token column on the user row, so logging in
    again replaces the previous token and invalidates it.
    """

    @classmethod
    async def register(cls, payload: Dict[str, Any]) -> UserRead:
        """Create a new user.

        Raises ``ConflictError`` if the username is already taken.  The
        unique index on ``users.username`` is the final arbiter, so a
        concurrent registration losing the race is reported the same
        way.
        """
        request = validate(RegisterUserRequest, payload)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT COUNT(*) AS count FROM users WHERE username = ?",
                (request.username,),
            ).fetchone()
            if row["count"]:
                raise ConflictError("Username already exists")
            try:
                cursor.execute(
                    "INSERT INTO users (username, password, name) VALUES (?, ?, ?)",
                    (request.username, hash_password(request.password), request.name),
                )
            except sqlite3.IntegrityError as exc:
                raise ConflictError("Username already exists") from exc
            conn.commit()
            logger.info("Registered user %s", request.username)
            return UserRead(username=request.username, name=request.name)
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @classmethod
    async def login(cls, payload: Dict[str, Any]) -> UserLoginRead:
        """Check credentials and issue a new session token.

        Unknown usernames and wrong passwords are indistinguishable to
        the caller.
        """
        request = validate(LoginUserRequest, payload)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT id, username, name, password FROM users WHERE username = ?",
                (request.username,),
            ).fetchone()
            if not row or not verify_password(request.password, row["password"]):
                logger.warning("Failed login for %s", request.username)
                raise UnauthorizedError("Username or password is wrong")
            token = generate_token()
            cursor.execute(
                "UPDATE users SET token = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (token, row["id"]),
            )
            conn.commit()
            logger.info("User %s logged in", row["username"])
            return UserLoginRead(username=row["username"], name=row["name"], token=token)
        finally:
            conn.close()

    @classmethod
    async def get(cls, user: Dict[str, Any]) -> UserRead:
        """Return the public view of the authenticated user."""
        return UserRead(username=user["username"], name=user["name"])

    @classmethod
    async def update(cls, user: Dict[str, Any], payload: Dict[str, Any]) -> UserRead:
        """Change the name and/or password of the authenticated user."""
        request = validate(UpdateUserRequest, payload)
        updates: Dict[str, Any] = {}
        if request.name is not None:
            updates["name"] = request.name
        if request.password is not None:
            updates["password"] = hash_password(request.password)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if updates:
                fields = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE users SET {fields}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (*updates.values(), user["id"]),
                )
                conn.commit()
                logger.info("Updated user %s (%s)", user["username"], ", ".join(updates))
            row = cursor.execute(
                "SELECT username, name FROM users WHERE id = ?",
                (user["id"],),
            ).fetchone()
            return UserRead(username=row["username"], name=row["name"])
        finally:
            conn.close()

    @classmethod
    async def logout(cls, user: Dict[str, Any]) -> bool:
        """Clear the session token of the authenticated user."""
        conn = get_connection()
        try:
            conn.execute(
                "UPDATE users SET token = NULL, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (user["id"],),
            )
            conn.commit()
            logger.info("User %s logged out", user["username"])
            return True
        finally:
            conn.close()

    @classmethod
    async def remove(cls, user: Dict[str, Any]) -> bool:
        """Delete the authenticated user together with their contacts."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM contacts WHERE user_id = ?", (user["id"],))
            cursor.execute("DELETE FROM users WHERE id = ?", (user["id"],))
            conn.commit()
            logger.info("Removed user %s", user["username"])
            return True
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
