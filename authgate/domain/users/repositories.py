# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import User, UserLookup


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> UserLookup: ...
    def exists_by_username(self, username: str) -> bool: ...
    def add(self, user: User) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
