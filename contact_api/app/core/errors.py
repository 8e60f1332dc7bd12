"""
Typed errors raised by the service layer.

Services never build HTTP responses themselves.  They raise one of the
``ApiError`` subclasses below and the exception handlers registered in
``main.create_app`` translate them into the ``{"errors": ...}``
envelope with the matching status code.
"""

from typing import Any, Dict, List, Union

from fastapi import status


class ApiError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, errors: Union[str, List[Dict[str, Any]], None] = None) -> None:
        self.errors = errors if errors is not None else self.default_message
        super().__init__(str(self.errors))


class ValidationError(ApiError):
    """A request payload violated one or more field constraints.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` entries,
    one per violated field.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"
