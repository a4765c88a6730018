# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from authgate.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _credential_fingerprint() -> str | None:
    """Short digest of the Authorization header, to follow one token across lines."""
    header = request.headers.get("Authorization")
    if not header:
        return None
    return hashlib.sha256(header.encode("utf-8")).hexdigest()[:8]


def _username() -> str | None:
    principal = getattr(g, "principal", None)
    return principal.username if principal is not None else None


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """One line when a request arrives and one when its response leaves.

    Must be installed before the interceptor chain so every request, including
    the ones the chain rejects, gets a correlation id.
    """

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6))
        g.request_started = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"http: > {request.method} {request.path} from={_client_ip()} "
                f"credential={_credential_fingerprint()} body_size={request.content_length or 0}"
            )
        else:
            logger.info(f"http: > {request.method} {request.path} from={_client_ip()}")

    @app.after_request
    def _finish(response: Response) -> Response:
        started = getattr(g, "request_started", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())

        logger.info(
            f"http: < {request.method} {request.path} status={response.status_code} "
            f"user={_username()} {elapsed_ms:.1f}ms"
        )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http: ! {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
