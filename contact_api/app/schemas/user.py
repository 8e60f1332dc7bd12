"""
Pydantic models for user data.

Request models describe what clients may send when registering,
logging in or editing their profile.  Read models are the public view
of a user and never include the password hash; the token is only
returned from login.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RegisterUserRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100, examples=["khannedy"])
    password: str = Field(..., min_length=1, max_length=100, examples=["rahasia"])
    name: str = Field(..., min_length=1, max_length=100, examples=["Eko Khannedy"])


class LoginUserRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=100)


class UpdateUserRequest(BaseModel):
    """Schema for editing the current user.

    Both fields are optional; only provided values are changed.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1, max_length=100)


class UserRead(BaseModel):
    """Public view of a user."""

    username: str
    name: str

    model_config = {
        "from_attributes": True,
    }


class UserLoginRead(UserRead):
    token: str
