# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authgate.application.use_cases.users.authenticate_user import AuthenticationProvider
from authgate.domain.tokens.codec import TokenCodec


class LoginUserUseCase:
    def __init__(
        self,
        *,
        provider: AuthenticationProvider,
        codec: TokenCodec,
        token_ttl_ms: int,
    ) -> None:
        self._provider = provider
        self._codec = codec
        self._token_ttl_ms = token_ttl_ms

    def execute(self, username: str, password: str) -> str:
        principal = self._provider.authenticate(username, password)
        return self._codec.encode(principal.username, principal.role, self._token_ttl_ms)
