# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, request
from pydantic import ValidationError

from authgate.application.use_cases.users.register_user import RegisterUserUseCase
from authgate.interfaces.http.dto.auth import JoinRequestDTO
from authgate.shared.errors.validation import raise_validation_error


class JoinController:
    def __init__(self, *, register_use_case: RegisterUserUseCase) -> None:
        self._register_use_case = register_use_case

    def join(self) -> Response:
        try:
            dto = JoinRequestDTO.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        # Same answer whether the account was created or already existed.
        self._register_use_case.execute(dto.username, dto.password)
        return Response("ok", mimetype="text/plain")

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("join", __name__)
        bp.add_url_rule("/join", view_func=self.join, methods=["POST"])
        return bp
