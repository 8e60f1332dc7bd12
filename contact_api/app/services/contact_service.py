"""
Service layer for contacts.

Every operation is scoped to the authenticated user.  A contact that
exists but belongs to someone else is reported exactly like a missing
one, so callers cannot discover other users' contact ids.

All queries use parameterized statements.
"""

import logging
import math
import sqlite3
from typing import Any, Dict, List, Tuple

from contact_api.app.core.db import SQLITE_MAX_INTEGER, get_connection
from contact_api.app.core.errors import NotFoundError
from contact_api.app.core.validation import validate
from contact_api.app.schemas.common import PageMeta
from contact_api.app.schemas.contact import ContactCreate, ContactRead, ContactSearch, ContactUpdate

logger = logging.getLogger(__name__)


class ContactService:
    """Service class for managing a user's contacts."""

    @classmethod
    async def create(cls, user: Dict[str, Any], payload: Dict[str, Any]) -> ContactRead:
        """Insert a new contact owned by ``user`` and return it."""
        request = validate(ContactCreate, payload)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO contacts (user_id, first_name, last_name, email, phone)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user["id"], request.first_name, request.last_name, request.email, request.phone),
            )
            contact_id = cursor.lastrowid
            conn.commit()
            logger.info("Created contact %s for user %s", contact_id, user["username"])
            row = cls._fetch_owned(cursor, user, contact_id)
            return cls._row_to_contact_read(row)
        finally:
            conn.close()

    @classmethod
    async def get(cls, user: Dict[str, Any], contact_id: int) -> ContactRead:
        """Return one of ``user``'s contacts or raise ``NotFoundError``."""
        conn = get_connection()
        try:
            row = cls._fetch_owned(conn.cursor(), user, contact_id)
            return cls._row_to_contact_read(row)
        finally:
            conn.close()

    @classmethod
    async def update(cls, user: Dict[str, Any], contact_id: int, payload: Dict[str, Any]) -> ContactRead:
        """Overwrite every field of an owned contact.

        The payload is validated before the contact is looked up, so an
        invalid request never touches the stored record.
        """
        request = validate(ContactUpdate, payload)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cls._fetch_owned(cursor, user, contact_id)
            cursor.execute(
                """
                UPDATE contacts
                SET first_name = ?, last_name = ?, email = ?, phone = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ? AND user_id = ?
                """,
                (
                    request.first_name,
                    request.last_name,
                    request.email,
                    request.phone,
                    contact_id,
                    user["id"],
                ),
            )
            conn.commit()
            logger.info("Updated contact %s", contact_id)
            row = cls._fetch_owned(cursor, user, contact_id)
            return cls._row_to_contact_read(row)
        finally:
            conn.close()

    @classmethod
    async def delete(cls, user: Dict[str, Any], contact_id: int) -> bool:
        """Delete an owned contact.  Returns ``True`` once it is gone."""
        cls._check_id(user, contact_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM contacts WHERE id = ? AND user_id = ?",
                (contact_id, user["id"]),
            )
            if cursor.rowcount == 0:
                logger.warning("Contact %s not found for user %s", contact_id, user["username"])
                raise NotFoundError("Contact is not found")
            conn.commit()
            logger.info("Deleted contact %s", contact_id)
            return True
        finally:
            conn.close()

    @classmethod
    async def search(cls, user: Dict[str, Any], filters: Dict[str, Any]) -> Tuple[List[ContactRead], PageMeta]:
        """Return a page of ``user``'s contacts matching the filters.

        ``name`` matches the first or last name, ``email`` and ``phone``
        match their own column; all are case-insensitive substring
        matches and combine with AND.
        """
        request = validate(ContactSearch, filters)
        conditions = ["user_id = ?"]
        params: List[Any] = [user["id"]]
        if request.name:
            conditions.append("(first_name LIKE ? ESCAPE '\\' OR last_name LIKE ? ESCAPE '\\')")
            params.extend([cls._like_pattern(request.name)] * 2)
        if request.email:
            conditions.append("email LIKE ? ESCAPE '\\'")
            params.append(cls._like_pattern(request.email))
        if request.phone:
            conditions.append("phone LIKE ? ESCAPE '\\'")
            params.append(cls._like_pattern(request.phone))
        where = " AND ".join(conditions)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            total = cursor.execute(
                f"SELECT COUNT(*) AS count FROM contacts WHERE {where}",
                tuple(params),
            ).fetchone()["count"]
            rows = cursor.execute(
                f"SELECT * FROM contacts WHERE {where} ORDER BY id ASC LIMIT ? OFFSET ?",
                (*params, request.size, (request.page - 1) * request.size),
            ).fetchall()
        finally:
            conn.close()
        paging = PageMeta(
            current_page=request.page,
            total_page=math.ceil(total / request.size),
            size=request.size,
        )
        return [cls._row_to_contact_read(row) for row in rows], paging

    @staticmethod
    def _check_id(user: Dict[str, Any], contact_id: int) -> None:
        # Ids outside the INTEGER range cannot be bound, and cannot exist.
        if not 1 <= contact_id <= SQLITE_MAX_INTEGER:
            logger.warning("Contact %s not found for user %s", contact_id, user["username"])
            raise NotFoundError("Contact is not found")

    @staticmethod
    def _like_pattern(term: str) -> str:
        """Wrap ``term`` for a literal substring match with ``ESCAPE '\\'``."""
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return f"%{escaped}%"

    @classmethod
    def _fetch_owned(cls, cursor: sqlite3.Cursor, user: Dict[str, Any], contact_id: int) -> sqlite3.Row:
        cls._check_id(user, contact_id)
        row = cursor.execute(
            "SELECT * FROM contacts WHERE id = ? AND user_id = ?",
            (contact_id, user["id"]),
        ).fetchone()
        if not row:
            logger.warning("Contact %s not found for user %s", contact_id, user["username"])
            raise NotFoundError("Contact is not found")
        return row

    @staticmethod
    def _row_to_contact_read(row: sqlite3.Row) -> ContactRead:
        """Convert a database row to a ContactRead schema instance."""
        return ContactRead(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
        )
