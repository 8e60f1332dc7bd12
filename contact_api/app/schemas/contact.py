"""
Pydantic schemas for contacts.

A contact belongs to exactly one user.  Only ``first_name`` is
required; the remaining fields are optional and stored as ``NULL``
when omitted.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from contact_api.app.core.db import SQLITE_MAX_INTEGER

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$")

# Keeps (page - 1) * size inside the SQLite OFFSET range for any allowed size.
MAX_PAGE = SQLITE_MAX_INTEGER // 100


class ContactBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100, examples=["Eko"])
    last_name: Optional[str] = Field(None, max_length=100, examples=["Khannedy"])
    email: Optional[str] = Field(None, max_length=100, examples=["eko@example.com"])
    phone: Optional[str] = Field(None, max_length=20, examples=["08123456789"])

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email is not a valid email address")
        return v


class ContactCreate(ContactBase):
    """Schema for creating a contact."""


class ContactUpdate(ContactBase):
    """Schema for replacing a contact.

    Updates overwrite every field, so omitted optional fields are
    cleared.
    """


class ContactRead(ContactBase):
    """Schema for reading a contact from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class ContactSearch(BaseModel):
    """Filters and paging for listing the caller's contacts."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    page: int = Field(1, ge=1, le=MAX_PAGE)
    size: int = Field(10, ge=1, le=100)
