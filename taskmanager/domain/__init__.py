# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import DomainError, InvariantViolation
from .tasks import Task, TaskList
from .users import Session, User

__all__ = [
    "DomainError",
    "InvariantViolation",
    "Session",
    "Task",
    "TaskList",
    "User",
]
