"""
Top-level package for the Contact Management API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``contact_api.app.main:app``.
"""

__all__ = []
