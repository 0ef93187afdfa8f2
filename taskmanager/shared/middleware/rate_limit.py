# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from threading import Lock

from flask import request

from taskmanager.shared.config import load_config
from taskmanager.shared.errors import RateLimitedError
from taskmanager.shared.logging import logger

from .client import client_ip


class InMemoryRateLimiter:
    """Sliding-window counter per key, process local."""

    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._hits: dict[str, deque[float]] = {}
        self._lock = Lock()
        self._next_sweep = 0.0

    @property
    def tracked_keys(self) -> int:
        return len(self._hits)

    def _sweep(self, cutoff: float) -> None:
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] < cutoff]
        for key in stale:
            del self._hits[key]

    def allow(self, key: str, *, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        cutoff = now - self._window
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(cutoff)
                self._next_sweep = now + self._window
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] < cutoff:
                hits.popleft()
            if len(hits) >= self._limit:
                return False
            hits.append(now)
            return True


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Decorator limiting a view per path and client address.

    Returns the view unchanged when ``ENABLE_RATE_LIMIT`` is off.
    """
    security = load_config().security
    limiter = InMemoryRateLimiter(
        limit or security.auth_rate_limit_requests,
        window_seconds or security.auth_rate_limit_window,
    )

    def decorator(view: Callable):
        if not security.enable_rate_limit:
            return view

        @wraps(view)
        def limited(*args, **kwargs):
            if not limiter.allow(f"{request.path}:{client_ip()}"):
                logger.warning("rate_limit: blocked {} {}", request.method, request.path)
                raise RateLimitedError()
            return view(*args, **kwargs)

        return limited

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
