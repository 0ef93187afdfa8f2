# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .password_hashing import WerkzeugPasswordHasher
from .session_manager import SessionManager
from .task_lists import TaskListService
from .token_service import TokenService, TokenSigningConfig

__all__ = [
    "SessionManager",
    "TaskListService",
    "TokenService",
    "TokenSigningConfig",
    "WerkzeugPasswordHasher",
]
