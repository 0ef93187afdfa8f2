# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskmanager.shared.errors.base import DomainError


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"


class SignupFailedError(DomainError):
    code = "signup_failed"
