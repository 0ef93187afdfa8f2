# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from taskmanager.domain.users.entities import User


@dataclass(slots=True, frozen=True)
class IssuedCredentials:
    """Everything a successful signup, login or refresh hands to the browser."""

    user: User
    access_token: str
    refresh_token: str
    csrf_token: str
