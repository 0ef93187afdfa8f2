# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Session:
    """A refresh grant held by one browser/device."""

    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    password_hash: str
    created_at: datetime
    sessions: tuple[Session, ...] = field(default=())

    def find_session(self, token: str) -> Session | None:
        for session in self.sessions:
            if session.token == token:
                return session
        return None
