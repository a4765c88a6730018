# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from authgate.domain.users.entities import Principal


@dataclass(slots=True, frozen=True)
class TokenClaims:

    username: str
    role: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now

    def to_principal(self) -> Principal:
        return Principal(username=self.username, role=self.role)
