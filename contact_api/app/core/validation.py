"""
Turn raw request payloads into validated schema instances.

Endpoints hand the decoded JSON body (or a mapping of query
parameters) to the service layer untouched; services call ``validate``
before doing any work so business logic only ever sees typed models.
A payload either validates completely or is rejected with every
violated field listed.
"""

from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic/FastAPI error dicts into ``{field, message}`` pairs.

    FastAPI prefixes locations with the request part (``body``,
    ``path``, ``query``); that prefix is dropped when a field name
    follows it.
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in {"body", "path", "query", "header"}:
            loc = loc[1:]
        formatted.append(
            {
                "field": ".".join(loc) if loc else "body",
                "message": error.get("msg", "Invalid value"),
            }
        )
    return formatted


def validate(schema: Type[ModelT], payload: Any) -> ModelT:
    """Validate ``payload`` against ``schema``.

    Raises
    ------
    ValidationError
        If ``payload`` is not a mapping or violates any field
        constraint of ``schema``.
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            [{"field": "body", "message": "Request body must be a JSON object"}]
        )
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(format_errors(exc.errors())) from exc
