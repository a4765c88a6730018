# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authgate.domain.users.entities import ROLE_ADMIN, User
from authgate.domain.users.exceptions import DuplicateUsernameError
from authgate.domain.users.repositories import PasswordHasher, UserRepository
from authgate.shared.logging import logger

# Every registered account is an administrator.
DEFAULT_ROLE = ROLE_ADMIN


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> User | None:
        """Create the account, or do nothing when the username is taken.

        Returns the stored record, or ``None`` when nothing was created.
        """
        if self._users.exists_by_username(username):
            logger.info(f"auth.join: username already taken, skipping username={username}")
            return None

        hashed = self._password_hasher.hash(password)
        try:
            persisted = self._users.add(
                User(id=0, username=username, password_hash=hashed, role=DEFAULT_ROLE)
            )
        except DuplicateUsernameError:
            logger.info(f"auth.join: lost insert race, skipping username={username}")
            return None

        logger.info(f"auth.join: created user_id={persisted.id} role={persisted.role}")
        return persisted
