# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from authgate.domain.users.entities import NotFound, Principal
from authgate.domain.users.exceptions import BadCredentialsError, UserNotFoundError
from authgate.domain.users.repositories import PasswordHasher, UserRepository


class AuthenticationProvider:
    """Checks a username/password pair against the credential store.

    Unknown usernames are still run through one hash verification, against a
    throwaway hash made at construction, so both failures cost about the same.
    """

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._decoy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def authenticate(self, username: str, password: str) -> Principal:
        lookup = self._users.find_by_username(username)
        if isinstance(lookup, NotFound):
            self._password_hasher.verify(password, self._decoy_hash)
            raise UserNotFoundError()

        user = lookup.user
        if not self._password_hasher.verify(password, user.password_hash):
            raise BadCredentialsError()

        return Principal(username=user.username, role=user.role)
