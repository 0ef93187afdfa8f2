# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def _field_name(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part is not None) or "body"


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Flatten pydantic errors into ``{"fields": [...], "errors": [...]}``.

    Raw input values are left out so passwords never reach the response.
    """
    errors: list[dict[str, Any]] = []
    for error in exc.errors(include_url=False, include_input=False):
        entry: dict[str, Any] = {
            "field": _field_name(tuple(error.get("loc", ()))),
            "type": error.get("type", "value_error"),
            "msg": error.get("msg", ""),
        }
        if ctx := error.get("ctx"):
            entry["ctx"] = {key: str(value) for key, value in ctx.items()}
        errors.append(entry)

    return {
        "fields": sorted({entry["field"] for entry in errors}),
        "errors": errors,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
