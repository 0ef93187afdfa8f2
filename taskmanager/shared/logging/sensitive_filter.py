# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_RULES = [
    # Signed tokens (JWT access tokens, itsdangerous refresh envelopes)
    (r"eyJ[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+", r"***JWT***"),

    # Auth headers and cookies
    (r"(x-access-token\s*[:=]\s*['\"]?)([^'\"\s,]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(x-xsrf-token\s*[:=]\s*['\"]?)([^'\"\s,]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(refresh[_-]?token\s*[:=]\s*['\"]?)([^'\"\s,;]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(xsrf-token\s*[:=]\s*['\"]?)([^'\"\s,;]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(cookie\s*:\s*['\"]?)([^'\"]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Generic tokens and secrets
    (r"(bearer\s+)([a-zA-Z0-9_\-\.]{20,})", r"\1***REDACTED***", re.IGNORECASE),
    (r"(token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{20,})(['\"]?)", r"\1***REDACTED***\3"),
    (r"(secret\s*[:=]\s*['\"]?)([^'\"\s]{8,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Passwords
    (r"(password\s*[:=]\s*['\"]?)([^'\"]{6,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(passwd\s*[:=]\s*['\"]?)([^'\"]{6,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Database URLs with credentials
    (r"(postgres(?:ql)?|mysql|mongodb)://([^:]+):([^@]+)@", r"\1://\2:***REDACTED***@"),

    # Email addresses (partial masking)
    (r"([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", r"***@\2"),
]

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(rule[0], rule[2] if len(rule) == 3 else 0), rule[1]) for rule in _RULES
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru sink filter; rewrites the message in place and never drops it."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message", "sanitize_record"]
