# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Task, TaskList


class TaskListRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[TaskList]: ...
    def get_for_user(self, user_id: int, list_id: int) -> TaskList | None: ...
    def add(self, user_id: int, title: str) -> TaskList: ...
    def rename(self, user_id: int, list_id: int, title: str) -> TaskList | None: ...
    def delete(self, user_id: int, list_id: int) -> TaskList | None: ...


class TaskRepository(Protocol):
    def list_for_list(self, list_id: int) -> Sequence[Task]: ...
    def add(self, list_id: int, title: str) -> Task: ...
    def update(
        self, list_id: int, task_id: int, *, title: str | None = None, completed: bool | None = None
    ) -> Task | None: ...
    def delete(self, list_id: int, task_id: int) -> Task | None: ...
    def delete_for_list(self, list_id: int) -> int: ...
