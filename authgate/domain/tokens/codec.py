# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import TokenClaims


class TokenCodec(Protocol):
    def encode(self, username: str, role: str, ttl_ms: int) -> str: ...
    def decode(self, token: str) -> TokenClaims: ...
    def verify(self, token: str, now: datetime | None = None) -> TokenClaims: ...
