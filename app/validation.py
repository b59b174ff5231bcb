"""
Input validation helpers.

Stores accept either an already-built request schema or a raw mapping; raw
input goes through the schema here so a malformed candidate surfaces as the
typed ValidationError instead of a pydantic exception.
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from app.core.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_errors(label: str, errors: Sequence[Mapping[str, Any]]) -> str:
    """
    Render pydantic error records as one readable sentence.

    Example:
        "Restaurant validation failed: name: Field required, menu.0.price: ..."
    """
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ()) if p != "body"]
        field = ".".join(loc)
        msg = error.get("msg", "Invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return f"{label} validation failed: " + ", ".join(parts)


def parse_candidate(model: type[ModelT], candidate: Any, label: str) -> ModelT:
    """
    Build a request schema from a candidate, raising ValidationError on failure.

    Args:
        model: The schema class to construct
        candidate: A model instance, a mapping, or anything else
        label: Entity name used in the error message

    Returns:
        The validated model instance
    """
    if isinstance(candidate, model):
        return candidate
    if isinstance(candidate, BaseModel):
        candidate = candidate.model_dump(by_alias=True)
    if not isinstance(candidate, Mapping):
        raise ValidationError(f"{label} validation failed: expected an object")

    try:
        return model.model_validate(candidate)
    except pydantic.ValidationError as e:
        raise ValidationError(
            format_errors(label, e.errors()),
            details={"errors": e.errors(include_url=False)},
        ) from e
