# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Ordered request interceptors run before any view.

Each interceptor either returns ``None`` to hand the request to the next one,
or returns a response, which ends the chain and is sent as-is.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from flask import Flask, Response


class RequestInterceptor(Protocol):
    def __call__(self) -> Response | None: ...


class InterceptorChain:
    def __init__(self, interceptors: Iterable[RequestInterceptor]) -> None:
        self._interceptors: tuple[RequestInterceptor, ...] = tuple(interceptors)

    @property
    def interceptors(self) -> Sequence[RequestInterceptor]:
        return self._interceptors

    def handle(self) -> Response | None:
        for interceptor in self._interceptors:
            response = interceptor()
            if response is not None:
                return response
        return None

    def install(self, app: Flask) -> None:
        app.before_request(self.handle)


__all__ = ["InterceptorChain", "RequestInterceptor"]
