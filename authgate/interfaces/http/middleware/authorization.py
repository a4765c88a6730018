# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Response, request

from authgate.application.services.authorization import AuthorizationPolicy, Decision
from authgate.shared.logging import logger

from .token_authentication import current_principal


class AuthorizationInterceptor:
    """Applies the path rules; denied requests never reach a view."""

    def __init__(self, *, policy: AuthorizationPolicy) -> None:
        self._policy = policy

    def __call__(self) -> Response | None:
        # CORS preflight carries no credentials.
        if request.method == "OPTIONS":
            return None

        principal = current_principal()
        decision = self._policy.evaluate(request.path, principal)
        if decision is Decision.ALLOW:
            return None

        username = principal.username if principal else None
        logger.warning(
            f"authz: {decision.value} {request.method} {request.path} user={username}"
        )
        if decision is Decision.UNAUTHENTICATED:
            response = Response(status=HTTPStatus.UNAUTHORIZED)
            response.headers["WWW-Authenticate"] = "Bearer"
            return response
        return Response(status=HTTPStatus.FORBIDDEN)


__all__ = ["AuthorizationInterceptor"]
