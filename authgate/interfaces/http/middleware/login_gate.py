# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Response, request

from authgate.application.use_cases.users.login_user import LoginUserUseCase
from authgate.domain.users.exceptions import AuthenticationError
from authgate.interfaces.http.dto.auth import LoginRequestDTO
from authgate.shared.logging import logger

from .token_authentication import BEARER_PREFIX

LOGIN_PATH = "/login"


class LoginInterceptor:
    """Turns a form-encoded ``POST /login`` into a bearer token or a bare 401.

    Unknown users and wrong passwords produce the same response.
    """

    def __init__(self, *, login_use_case: LoginUserUseCase, path: str = LOGIN_PATH) -> None:
        self._login_use_case = login_use_case
        self._path = path

    def __call__(self) -> Response | None:
        if request.method != "POST" or request.path != self._path:
            return None

        dto = LoginRequestDTO.model_validate(request.form.to_dict())
        logger.info(f"auth.login: attempt username={dto.username}")

        try:
            token = self._login_use_case.execute(dto.username, dto.password)
        except AuthenticationError as exc:
            logger.warning(
                f"auth.login: rejected username={dto.username} reason={type(exc).__name__}"
            )
            return Response(status=HTTPStatus.UNAUTHORIZED)

        response = Response(status=HTTPStatus.OK)
        response.headers["Authorization"] = BEARER_PREFIX + token
        logger.info(f"auth.login: ok username={dto.username}")
        return response


__all__ = ["LOGIN_PATH", "LoginInterceptor"]
