# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any


class AppError(Exception):
    """Error with a stable machine-readable code and the HTTP status it maps to.

    Subclasses pin ``code`` and ``status`` as class attributes; ``context``
    carries per-instance details that are safe to show a client.
    """

    code: str = "internal_error"
    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message or self.code)
        self.context: dict[str, Any] = dict(context) if context else {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = self.context
        return payload


class DomainError(AppError):
    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST


class ValidationError(AppError):
    code = "validation_error"
    status = HTTPStatus.UNPROCESSABLE_ENTITY
