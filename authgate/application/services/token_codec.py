# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, self-contained credential tokens.

Tokens are compact JWS strings (``header.payload.signature``) signed with
HMAC-SHA256. The payload carries two custom claims, ``username`` and ``role``,
plus the registered ``iat`` and ``exp`` NumericDates. Both timestamps keep
millisecond precision, so the expiry embedded at issuance is exactly
``iat + ttl_ms`` and validation never needs to know the TTL.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.utils import base64url_decode, base64url_encode

from authgate.domain.tokens.codec import TokenCodec
from authgate.domain.tokens.entities import TokenClaims
from authgate.domain.tokens.exceptions import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from authgate.shared.logging import logger

ALGORITHM = "HS256"
USERNAME_CLAIM = "username"
ROLE_CLAIM = "role"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)
_REQUIRED_CLAIMS = [USERNAME_CLAIM, ROLE_CLAIM, "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _to_epoch_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (value - _EPOCH) // _ONE_MS


def _from_numeric_date(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedTokenError(context={"reason": "numeric_date"})
    return _EPOCH + timedelta(milliseconds=round(value * 1000))


def _string_claim(payload: dict[str, Any], name: str) -> str:
    value = payload.get(name)
    if not isinstance(value, str):
        raise MalformedTokenError(context={"reason": f"{name}_claim"})
    return value


def _has_parseable_header(segments: list[str]) -> bool:
    if len(segments) != 3:
        return False
    try:
        header = json.loads(base64url_decode(segments[0]))
    except ValueError:
        return False
    return isinstance(header, dict)


def _is_canonical_segment(segment: str) -> bool:
    # Lenient base64 decoders ignore trailing pad bits and stray characters,
    # so an edited segment can decode to the original bytes.
    try:
        return base64url_encode(base64url_decode(segment)).decode("ascii") == segment
    except ValueError:
        return False


class JwtTokenCodec(TokenCodec):
    def __init__(self, secret: str, *, clock: Callable[[], datetime] | None = None) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode("utf-8")
        self._clock = clock or _utcnow

    def encode(self, username: str, role: str, ttl_ms: int) -> str:
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")
        issued_ms = _to_epoch_ms(self._clock())
        payload = {
            USERNAME_CLAIM: username,
            ROLE_CLAIM: role,
            "iat": issued_ms / 1000,
            "exp": (issued_ms + ttl_ms) / 1000,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> TokenClaims:
        """Verify the signature and parse the claims without judging expiry.

        Once the header parses, any damage to the payload or signature segment
        is reported as ``InvalidSignatureError``; tokens without that much
        structure are ``MalformedTokenError``.
        """
        segments = token.split(".")
        framed = _has_parseable_header(segments)
        if framed and not all(_is_canonical_segment(segment) for segment in segments[1:]):
            logger.debug("token.decode: signature rejected (non-canonical segment)")
            raise InvalidSignatureError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            logger.debug(f"token.decode: signature rejected ({type(exc).__name__})")
            raise InvalidSignatureError() from exc
        except jwt.DecodeError as exc:
            if framed:
                logger.debug(f"token.decode: signature rejected ({exc})")
                raise InvalidSignatureError() from exc
            logger.debug(f"token.decode: malformed token ({exc})")
            raise MalformedTokenError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug(f"token.decode: malformed token ({type(exc).__name__})")
            raise MalformedTokenError() from exc

        return TokenClaims(
            username=_string_claim(payload, USERNAME_CLAIM),
            role=_string_claim(payload, ROLE_CLAIM),
            issued_at=_from_numeric_date(payload["iat"]),
            expires_at=_from_numeric_date(payload["exp"]),
        )

    def decode_username(self, token: str) -> str:
        return self.decode(token).username

    def decode_role(self, token: str) -> str:
        return self.decode(token).role

    def is_expired(self, token: str, now: datetime | None = None) -> bool:
        claims = self.decode(token)
        return claims.is_expired(now or self._clock())

    def verify(self, token: str, now: datetime | None = None) -> TokenClaims:
        claims = self.decode(token)
        if claims.is_expired(now or self._clock()):
            raise TokenExpiredError()
        return claims


__all__ = ["ALGORITHM", "JwtTokenCodec"]
