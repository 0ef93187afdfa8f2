# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from taskmanager.domain.tasks.entities import Task, TaskList
from taskmanager.domain.tasks.repositories import TaskListRepository, TaskRepository
from taskmanager.shared.errors import ListNotFoundError, TaskNotFoundError
from taskmanager.shared.logging import logger


class TaskListService:
    """List and task operations scoped to the owning user.

    A list that belongs to another user is reported exactly like a missing
    one, so list ids cannot be probed across accounts.
    """

    def __init__(self, *, lists: TaskListRepository, tasks: TaskRepository) -> None:
        self._lists = lists
        self._tasks = tasks

    def _owned_list(self, user_id: int, list_id: int) -> TaskList:
        task_list = self._lists.get_for_user(user_id, list_id)
        if task_list is None:
            raise ListNotFoundError(list_id)
        return task_list

    def list_lists(self, user_id: int) -> Sequence[TaskList]:
        return self._lists.list_for_user(user_id)

    def create_list(self, user_id: int, title: str) -> TaskList:
        return self._lists.add(user_id, title)

    def rename_list(self, user_id: int, list_id: int, title: str | None) -> TaskList:
        if title is None:
            return self._owned_list(user_id, list_id)
        renamed = self._lists.rename(user_id, list_id, title)
        if renamed is None:
            raise ListNotFoundError(list_id)
        return renamed

    def delete_list(self, user_id: int, list_id: int) -> TaskList:
        removed = self._lists.delete(user_id, list_id)
        if removed is None:
            raise ListNotFoundError(list_id)
        dropped = self._tasks.delete_for_list(list_id)
        logger.debug(f"lists.delete: cascaded tasks (list_id={list_id}, n={dropped})")
        return removed

    def list_tasks(self, user_id: int, list_id: int) -> Sequence[Task]:
        self._owned_list(user_id, list_id)
        return self._tasks.list_for_list(list_id)

    def create_task(self, user_id: int, list_id: int, title: str) -> Task:
        self._owned_list(user_id, list_id)
        return self._tasks.add(list_id, title)

    def update_task(
        self,
        user_id: int,
        list_id: int,
        task_id: int,
        *,
        title: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        self._owned_list(user_id, list_id)
        updated = self._tasks.update(list_id, task_id, title=title, completed=completed)
        if updated is None:
            raise TaskNotFoundError(task_id)
        return updated

    def delete_task(self, user_id: int, list_id: int, task_id: int) -> Task:
        self._owned_list(user_id, list_id)
        removed = self._tasks.delete(list_id, task_id)
        if removed is None:
            raise TaskNotFoundError(task_id)
        return removed


__all__ = ["TaskListService"]
