# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations


class ClientError(Exception):
    """Base error for the task manager HTTP client."""

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class AuthenticationFailedError(ClientError):
    """Signup or login was refused by the server."""


class SessionTerminatedError(ClientError):
    """The refresh session is gone; the client has already been logged out."""


__all__ = ["AuthenticationFailedError", "ClientError", "SessionTerminatedError"]
