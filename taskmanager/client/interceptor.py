# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import httpx

ACCESS_TOKEN_HEADER = "x-access-token"
CSRF_COOKIE = "XSRF-TOKEN"
CSRF_HEADER = "X-XSRF-TOKEN"


def apply_auth_headers(
    request: httpx.Request,
    access_token: str | None,
    csrf_token: str | None,
) -> httpx.Request:
    """Return a copy of ``request`` carrying the access token and CSRF echo.

    Each header is added only when its value is present; the input request is
    left untouched.
    """
    if not access_token and not csrf_token:
        return request

    headers = request.headers.copy()
    if access_token:
        headers[ACCESS_TOKEN_HEADER] = access_token
    if csrf_token:
        headers[CSRF_HEADER] = csrf_token

    return httpx.Request(
        request.method,
        request.url,
        headers=headers,
        content=request.content,
        extensions=request.extensions,
    )


__all__ = ["ACCESS_TOKEN_HEADER", "CSRF_COOKIE", "CSRF_HEADER", "apply_auth_headers"]
