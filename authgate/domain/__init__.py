# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .tokens.entities import TokenClaims
from .users.entities import ROLE_ADMIN, Found, NotFound, Principal, User, UserLookup

__all__ = [
    "ROLE_ADMIN",
    "Found",
    "NotFound",
    "Principal",
    "TokenClaims",
    "User",
    "UserLookup",
]
