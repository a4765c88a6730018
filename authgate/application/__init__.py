# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.authorization import AccessRule, AuthorizationPolicy, Decision, PathRule, default_policy
from .services.password_hashing import WerkzeugPasswordHasher
from .services.token_codec import JwtTokenCodec

__all__ = [
    "AccessRule",
    "AuthorizationPolicy",
    "Decision",
    "JwtTokenCodec",
    "PathRule",
    "WerkzeugPasswordHasher",
    "default_policy",
]
