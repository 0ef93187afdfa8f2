from .base import (
    AppError,
    ConfigurationError,
    CsrfMismatchError,
    DomainError,
    InfrastructureError,
    InvalidTokenError,
    ListNotFoundError,
    RateLimitedError,
    SessionExpiredError,
    SessionNotFoundError,
    TaskNotFoundError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ConfigurationError",
    "CsrfMismatchError",
    "DomainError",
    "InfrastructureError",
    "InvalidTokenError",
    "ListNotFoundError",
    "RateLimitedError",
    "SessionExpiredError",
    "SessionNotFoundError",
    "TaskNotFoundError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
