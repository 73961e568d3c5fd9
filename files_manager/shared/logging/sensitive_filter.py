# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

# Applied in order; earlier rules may consume text a later rule would match.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Session tokens
    (re.compile(r"(x-token\s*[:=]\s*['\"]?)([\w\-.]{8,})", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)([\w\-.]{20,})"), rf"\1{_REDACTED}"),
    (re.compile(r"(auth_)([0-9a-fA-F]{8})[0-9a-fA-F\-]{20,}"), r"\1\2…"),
    # Passwords and digests
    (re.compile(r"((?:password|pwd)\s*[:=]\s*['\"]?)([^'\"\s]{6,})", re.IGNORECASE), rf"\1{_REDACTED}"),
    # Store URLs with credentials
    (re.compile(r"((?:redis|rediss|mongodb|mongodb\+srv)://[^:/@\s]+:)([^@\s]+)@"), rf"\1{_REDACTED}@"),
    # Emails keep their domain
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})"), r"***@\1"),
    # Authorization headers
    (re.compile(r"(authorization\s*:\s*['\"]?)([^'\"]{10,})", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"(basic\s+)([A-Za-z0-9+/=]{8,})", re.IGNORECASE), rf"\1{_REDACTED}"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru filter: rewrites the message in place and never drops a record."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


def mask_token(token: str | None) -> str:
    if not token:
        return "-"
    return f"{token[:8]}…"


__all__ = ["mask_token", "sanitize_message", "sanitize_record"]
