# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import BadRequestError


class ValidationError(BadRequestError):
    pass


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part is not None) or "unknown"


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    grouped: dict[str, list[str]] = {}

    for error in exc.errors():
        field = _field_path(error.get("loc", ()))
        grouped.setdefault(field, []).append(error.get("msg", "Invalid value"))

    return {
        "fields": list(grouped),
        "errors": grouped,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    context = format_pydantic_errors(exc)
    message = f"Validation failed for: {', '.join(context['fields'])}"
    raise ValidationError(message, details=context) from exc


__all__ = [
    "ValidationError",
    "format_pydantic_errors",
    "raise_validation_error",
]
