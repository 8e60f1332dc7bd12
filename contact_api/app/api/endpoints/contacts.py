"""
Contact endpoints.

All routes require an authenticated user and only ever see that
user's contacts.  Contacts owned by someone else answer 404.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from contact_api.app.core.security import get_current_user
from contact_api.app.schemas.common import DataResponse, PagedResponse
from contact_api.app.schemas.contact import ContactRead
from contact_api.app.services.contact_service import ContactService

router = APIRouter()


@router.post("", response_model=DataResponse[ContactRead])
async def create_contact(
    payload: Dict[str, Any] = Body(...),
    current_user: dict = Depends(get_current_user),
) -> DataResponse[ContactRead]:
    contact = await ContactService.create(current_user, payload)
    return DataResponse[ContactRead](data=contact)


@router.get("", response_model=PagedResponse[ContactRead])
async def search_contacts(
    name: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    phone: Optional[str] = Query(None),
    page: int = Query(1),
    size: int = Query(10),
    current_user: dict = Depends(get_current_user),
) -> PagedResponse[ContactRead]:
    """List the current user's contacts, optionally filtered.

    ``page`` starts at 1 and ``size`` is capped at 100.
    """
    filters = {"name": name, "email": email, "phone": phone, "page": page, "size": size}
    contacts, paging = await ContactService.search(current_user, filters)
    return PagedResponse[ContactRead](data=contacts, paging=paging)


@router.get("/{contact_id}", response_model=DataResponse[ContactRead])
async def get_contact(
    contact_id: int,
    current_user: dict = Depends(get_current_user),
) -> DataResponse[ContactRead]:
    contact = await ContactService.get(current_user, contact_id)
    return DataResponse[ContactRead](data=contact)


@router.put("/{contact_id}", response_model=DataResponse[ContactRead])
async def update_contact(
    contact_id: int,
    payload: Dict[str, Any] = Body(...),
    current_user: dict = Depends(get_current_user),
) -> DataResponse[ContactRead]:
    """Replace every field of a contact."""
    contact = await ContactService.update(current_user, contact_id, payload)
    return DataResponse[ContactRead](data=contact)


@router.delete("/{contact_id}", response_model=DataResponse[bool])
async def delete_contact(
    contact_id: int,
    current_user: dict = Depends(get_current_user),
) -> DataResponse[bool]:
    return DataResponse[bool](data=await ContactService.delete(current_user, contact_id))
