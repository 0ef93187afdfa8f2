# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response

from taskmanager.shared.config import load_config


def set_auth_cookies(
    response: Response,
    *,
    refresh_token: str,
    csrf_token: str,
    access_token: str | None = None,
) -> Response:
    """Attach the refresh/CSRF cookies and, when given, the access-token header."""
    config = load_config()
    auth = config.auth
    security = config.security
    max_age = auth.session_ttl_days * 24 * 60 * 60

    response.set_cookie(
        auth.refresh_cookie,
        refresh_token,
        httponly=True,
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
        path=auth.refresh_path,
        max_age=max_age,
    )
    response.set_cookie(
        auth.csrf_cookie,
        csrf_token,
        httponly=False,
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
        path="/",
        max_age=max_age,
    )
    if access_token:
        response.headers[auth.access_token_header] = access_token
    return response


def clear_auth_cookies(response: Response) -> Response:
    config = load_config()
    auth = config.auth
    security = config.security
    response.delete_cookie(
        auth.refresh_cookie,
        path=auth.refresh_path,
        httponly=True,
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
    )
    response.delete_cookie(
        auth.csrf_cookie,
        path="/",
        samesite=security.cookie_samesite,
        secure=security.cookie_secure,
    )
    return response


__all__ = ["clear_auth_cookies", "set_auth_cookies"]
