"""Turn pydantic validation failures into per-field messages for forms."""
from __future__ import annotations

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def field_errors(exc: ValidationError, model: Type[BaseModel] | None = None) -> dict[str, str]:
    """First message per field, keyed by Python field name.

    Messages raised by custom validators are returned verbatim.
    """

    names: dict[str, str] = {}
    if model is not None:
        for name, info in model.model_fields.items():
            if info.alias:
                names[info.alias] = name
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"]]
        if loc:
            loc[0] = names.get(loc[0], loc[0])
        field = ".".join(loc) or "__root__"
        if field in errors:
            continue
        ctx = error.get("ctx") or {}
        if error["type"] == "value_error" and "error" in ctx:
            errors[field] = str(ctx["error"])
        else:
            errors[field] = error["msg"]
    return errors


def validate_form(model: Type[FormT], data: Mapping[str, Any]) -> tuple[FormT | None, dict[str, str]]:
    try:
        return model.model_validate(dict(data)), {}
    except ValidationError as exc:
        return None, field_errors(exc, model)


__all__ = ["field_errors", "validate_form"]
