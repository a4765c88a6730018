# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    # Field names and error types only; submitted values may be passwords.
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "type": err["type"],
        }
        for err in exc.errors(include_url=False)
    ]
    return {
        "fields": sorted({error["field"] for error in errors}),
        "errors": errors,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
