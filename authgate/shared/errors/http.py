# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from authgate.shared.logging import logger

from .base import AppError


def error_response(error: AppError) -> Response:
    response = jsonify(error.to_dict())
    response.status_code = error.status
    if error.status == HTTPStatus.UNAUTHORIZED:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


def register_error_handler(app: Flask, *, debug_mode: bool = False) -> None:
    """JSON bodies for ``AppError``; a generic 500 for anything unexpected."""

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError) -> Response:
        logger.warning(
            f"error: {exc.code} status={int(exc.status)} on {request.method} {request.path}"
        )
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException) -> HTTPException:
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception) -> Response:
        if debug_mode:
            logger.opt(exception=exc).error(
                f"error: unhandled {type(exc).__name__} on {request.method} {request.path}"
            )
        else:
            logger.error(f"error: unhandled {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"error": "internal_error"})
        response.status_code = HTTPStatus.INTERNAL_SERVER_ERROR
        return response
