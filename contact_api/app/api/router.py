"""
Top-level API router.

Aggregates the domain routers under a single ``APIRouter`` which
``main.create_app`` mounts below ``settings.api_prefix``.
"""

from fastapi import APIRouter

from .endpoints import contacts, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
