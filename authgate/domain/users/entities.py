# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

ROLE_ADMIN = "ROLE_ADMIN"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    role: str


@dataclass(slots=True, frozen=True)
class Principal:
    """Authenticated caller: one username, exactly one role."""

    username: str
    role: str

    def has_role(self, role: str) -> bool:
        return self.role == role


@dataclass(slots=True, frozen=True)
class Found:

    user: User


@dataclass(slots=True, frozen=True)
class NotFound:

    username: str


UserLookup: TypeAlias = Found | NotFound
