# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from sqlalchemy import text

from taskmanager.infrastructure.db import ENGINE


def check_database() -> float:
    """Round-trip ``SELECT 1``; returns the latency in milliseconds."""
    started = time.perf_counter()
    with ENGINE.connect() as connection:
        connection.execute(text("SELECT 1")).scalar_one()
    return round((time.perf_counter() - started) * 1000, 2)


__all__ = ["check_database"]
