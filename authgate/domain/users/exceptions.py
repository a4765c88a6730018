# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authgate.shared.errors.base import DomainError


class AuthenticationError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class UserNotFoundError(AuthenticationError):
    pass


class BadCredentialsError(AuthenticationError):
    pass


class DuplicateUsernameError(DomainError):
    code = "duplicate_username"
    status = HTTPStatus.CONFLICT
