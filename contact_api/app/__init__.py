"""
Application package.

Contains the FastAPI entrypoint (``main``) and its layers: ``api``
(routing), ``services`` (business logic), ``schemas`` (payload models)
and ``core`` (configuration, database, security, errors).
"""

from .main import app  # noqa: F401
