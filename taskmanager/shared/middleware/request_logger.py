# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from taskmanager.shared.config import load_config
from taskmanager.shared.logging import clear_correlation_id, get_correlation_id, logger, set_correlation_id

from .client import client_ip

REQUEST_ID_HEADER = "X-Request-ID"

# Values are replaced by a short digest so requests can still be told apart
_HASHED_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-access-token", "x-xsrf-token"})


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers() -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _HASHED_HEADERS else value
        for name, value in request.headers.items()
    }


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8))
        g.request_started = time.perf_counter()
        if verbose:
            logger.debug(
                "-> {} {} from {} headers={} body={}B",
                request.method,
                request.path,
                client_ip(),
                _safe_headers(),
                request.content_length or 0,
            )
        else:
            logger.info("-> {} {} from {}", request.method, request.path, client_ip())

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
        response.headers[REQUEST_ID_HEADER] = get_correlation_id()
        logger.info(
            "<- {} {} {} in {:.3f}s user={}",
            request.method,
            request.path,
            response.status_code,
            elapsed,
            g.get("user_id"),
        )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error("request failed: {} on {} {}", type(exc).__name__, request.method, request.path)
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
