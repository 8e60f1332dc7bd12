"""
User endpoints.

Registration and login are public; everything under ``/current``
requires the session token returned by login in the ``Authorization``
header.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from contact_api.app.core.security import get_current_user
from contact_api.app.schemas.common import DataResponse
from contact_api.app.schemas.user import UserLoginRead, UserRead
from contact_api.app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=DataResponse[UserRead])
async def register_user(payload: Dict[str, Any] = Body(...)) -> DataResponse[UserRead]:
    """Register a new user.  Responds 409 if the username is taken."""
    user = await UserService.register(payload)
    return DataResponse[UserRead](data=user)


@router.post("/login", response_model=DataResponse[UserLoginRead])
async def login_user(payload: Dict[str, Any] = Body(...)) -> DataResponse[UserLoginRead]:
    """Check credentials and return a fresh session token.

    Logging in again replaces the previous token.
    """
    user = await UserService.login(payload)
    return DataResponse[UserLoginRead](data=user)


@router.get("/current", response_model=DataResponse[UserRead])
async def get_current(current_user: dict = Depends(get_current_user)) -> DataResponse[UserRead]:
    user = await UserService.get(current_user)
    return DataResponse[UserRead](data=user)


@router.patch("/current", response_model=DataResponse[UserRead])
async def update_current(
    payload: Dict[str, Any] = Body(...),
    current_user: dict = Depends(get_current_user),
) -> DataResponse[UserRead]:
    """Change the name and/or password of the current user."""
    user = await UserService.update(current_user, payload)
    return DataResponse[UserRead](data=user)


@router.delete("/current", response_model=DataResponse[bool])
async def logout(current_user: dict = Depends(get_current_user)) -> DataResponse[bool]:
    """Invalidate the current session token."""
    return DataResponse[bool](data=await UserService.logout(current_user))


@router.delete("/current/account", response_model=DataResponse[bool])
async def remove_account(current_user: dict = Depends(get_current_user)) -> DataResponse[bool]:
    """Delete the current user and all of their contacts."""
    return DataResponse[bool](data=await UserService.remove(current_user))
