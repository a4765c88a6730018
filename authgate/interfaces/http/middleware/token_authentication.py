# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response, g, request

from authgate.domain.tokens.codec import TokenCodec
from authgate.domain.tokens.exceptions import TokenError
from authgate.domain.users.entities import Principal
from authgate.shared.logging import logger

BEARER_PREFIX = "Bearer "


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith(BEARER_PREFIX):
        return ""
    return auth[len(BEARER_PREFIX):].strip()


def current_principal() -> Principal | None:
    return getattr(g, "principal", None)


class TokenAuthenticationInterceptor:
    """Resolves the bearer token into ``g.principal``; never rejects on its own."""

    def __init__(self, *, codec: TokenCodec) -> None:
        self._codec = codec

    def __call__(self) -> Response | None:
        g.principal = None

        token = bearer_token()
        if not token:
            return None

        try:
            claims = self._codec.verify(token)
        except TokenError as exc:
            logger.warning(
                f"auth.token: rejected {type(exc).__name__} on {request.method} {request.path}"
            )
            return None

        g.principal = claims.to_principal()
        logger.debug(f"auth.token: ok username={claims.username} role={claims.role}")
        return None


__all__ = ["TokenAuthenticationInterceptor", "bearer_token", "current_principal"]
