# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .api import TaskManagerClient
from .coordinator import RefreshCoordinator
from .exceptions import AuthenticationFailedError, ClientError, SessionTerminatedError
from .interceptor import apply_auth_headers
from .session import ClientSession

__all__ = [
    "AuthenticationFailedError",
    "ClientError",
    "ClientSession",
    "RefreshCoordinator",
    "SessionTerminatedError",
    "TaskManagerClient",
    "apply_auth_headers",
]
