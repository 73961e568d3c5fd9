# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Field paths and error types only; input values are never echoed back."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())) or "body",
            "type": error.get("type", "value_error"),
        }
        for error in exc.errors()
    ]
    return {"fields": sorted({entry["field"] for entry in errors}), "errors": errors}


def validate_body(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a JSON request body, raising ``ValidationError`` (422) on failure."""
    try:
        return model.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = [
    "format_pydantic_errors",
    "validate_body",
]
