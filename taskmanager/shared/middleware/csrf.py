# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""CSRF double-submit gate.

The browser receives a readable ``XSRF-TOKEN`` cookie and must echo it in the
``X-XSRF-TOKEN`` header. Only cookie-authenticated endpoints are guarded; the
access-token header cannot be forged cross-site and needs no CSRF check.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from functools import wraps

from flask import request

from taskmanager.infrastructure.audit import AuditAction, audit_log
from taskmanager.shared.config import load_config
from taskmanager.shared.errors import CsrfMismatchError
from taskmanager.shared.logging import logger

from .client import client_ip


def csrf_tokens_match(cookie: str | None, header: str | None) -> bool:
    if not cookie or not header:
        return False
    # Header values may carry non-ASCII text, which compare_digest refuses as str
    return secrets.compare_digest(cookie.encode(), header.encode())


def csrf_required(f: Callable):
    @wraps(f)
    def wrapper(*args, **kwargs):
        auth = load_config().auth
        cookie = request.cookies.get(auth.csrf_cookie)
        header = request.headers.get(auth.csrf_header)
        if not csrf_tokens_match(cookie, header):
            logger.warning(
                f"csrf: rejected {request.method} {request.path} "
                f"(cookie={'set' if cookie else 'missing'}, header={'set' if header else 'missing'})"
            )
            audit_log(
                AuditAction.CSRF_REJECTED,
                ip_address=client_ip(),
                details={"path": request.path},
                success=False,
            )
            raise CsrfMismatchError()
        return f(*args, **kwargs)

    return wrapper


__all__ = ["csrf_required", "csrf_tokens_match"]
