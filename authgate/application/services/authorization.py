# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Static path-to-role access rules, first match wins."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from authgate.domain.users.entities import ROLE_ADMIN, Principal


class AccessRule(str, Enum):
    PERMIT_ALL = "permit_all"
    AUTHENTICATED = "authenticated"
    HAS_ROLE = "has_role"


class Decision(str, Enum):
    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(slots=True, frozen=True)
class PathRule:
    """Access requirement for a set of exact paths; ``paths=None`` matches any path."""

    paths: frozenset[str] | None
    access: AccessRule
    role: str | None = None

    def __post_init__(self) -> None:
        if self.access is AccessRule.HAS_ROLE and not self.role:
            raise ValueError("HAS_ROLE rule requires a role")

    @classmethod
    def permit_all(cls, *paths: str) -> PathRule:
        return cls(frozenset(paths), AccessRule.PERMIT_ALL)

    @classmethod
    def has_role(cls, role: str, *paths: str) -> PathRule:
        return cls(frozenset(paths), AccessRule.HAS_ROLE, role)

    @classmethod
    def any_request_authenticated(cls) -> PathRule:
        return cls(None, AccessRule.AUTHENTICATED)

    def matches(self, path: str) -> bool:
        return self.paths is None or path in self.paths

    def decide(self, principal: Principal | None) -> Decision:
        if self.access is AccessRule.PERMIT_ALL:
            return Decision.ALLOW
        if principal is None:
            return Decision.UNAUTHENTICATED
        if self.access is AccessRule.HAS_ROLE and not principal.has_role(self.role or ""):
            return Decision.FORBIDDEN
        return Decision.ALLOW


class AuthorizationPolicy:
    def __init__(self, rules: Iterable[PathRule]) -> None:
        self._rules: tuple[PathRule, ...] = tuple(rules)

    @property
    def rules(self) -> Sequence[PathRule]:
        return self._rules

    def evaluate(self, path: str, principal: Principal | None) -> Decision:
        for rule in self._rules:
            if rule.matches(path):
                return rule.decide(principal)
        # no rule matched: deny
        return Decision.UNAUTHENTICATED if principal is None else Decision.FORBIDDEN


def default_policy() -> AuthorizationPolicy:
    return AuthorizationPolicy(
        [
            PathRule.permit_all("/login", "/", "/join"),
            PathRule.has_role(ROLE_ADMIN, "/admin"),
            PathRule.any_request_authenticated(),
        ]
    )


__all__ = ["AccessRule", "AuthorizationPolicy", "Decision", "PathRule", "default_policy"]
