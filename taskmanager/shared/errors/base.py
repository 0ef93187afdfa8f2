# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(code=resolved_code, status=resolved_status, context=context)


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            context=context,
        )


class ConfigurationError(InfrastructureError):
    """Signing key (or other startup configuration) is missing."""

    def __init__(self, setting: str = "JWT_SECRET") -> None:
        super().__init__(
            code="configuration_error",
            context={"setting": setting},
        )


class InvalidTokenError(AppError):
    def __init__(self, reason: str = "invalid") -> None:
        super().__init__(
            code="invalid_token",
            status=HTTPStatus.UNAUTHORIZED,
            context={"reason": reason},
        )


class SessionNotFoundError(AppError):
    def __init__(self, reason: str = "unknown_session") -> None:
        super().__init__(
            code="session_not_found",
            status=HTTPStatus.UNAUTHORIZED,
            context={"reason": reason},
        )


class SessionExpiredError(AppError):
    def __init__(self) -> None:
        super().__init__(code="session_expired", status=HTTPStatus.UNAUTHORIZED)


class CsrfMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(code="csrf_mismatch", status=HTTPStatus.FORBIDDEN)


class RateLimitedError(AppError):
    def __init__(self) -> None:
        super().__init__(code="rate_limited", status=HTTPStatus.TOO_MANY_REQUESTS)


class ListNotFoundError(AppError):
    def __init__(self, list_id: int) -> None:
        super().__init__(
            code="list_not_found",
            status=HTTPStatus.NOT_FOUND,
            context={"list_id": list_id},
        )


class TaskNotFoundError(AppError):
    def __init__(self, task_id: int) -> None:
        super().__init__(
            code="task_not_found",
            status=HTTPStatus.NOT_FOUND,
            context={"task_id": task_id},
        )
