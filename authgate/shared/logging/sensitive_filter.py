# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Scrubs credentials out of log messages before any sink writes them."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***REDACTED***"

# Applied in order; a raw token is masked before the header rules see it.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # compact JWS; every JSON header base64-encodes to "eyJ..."
    (re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+"), "***JWT***"),
    (re.compile(r"(\bbearer\s+)\S{8,}", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(\bauthorization\s*[:=]\s*)\S.*", re.IGNORECASE), rf"\1{REDACTED}"),
    (
        re.compile(r"((?:jwt[_-]?)?secret(?:[_-]?key)?\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
    (
        re.compile(r"((?:password|passwd|pwd)\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
    # user:password@ in connection URLs
    (re.compile(r"(\b\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\1{REDACTED}@"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru ``filter`` hook: rewrites the message in place, never drops it."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["REDACTED", "sanitize_message", "sanitize_record"]
