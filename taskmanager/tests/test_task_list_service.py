from __future__ import annotations

import pytest

from taskmanager.application.services.task_lists import TaskListService
from taskmanager.domain.exceptions import InvariantViolation
from taskmanager.domain.tasks.entities import TaskList
from taskmanager.shared.errors import ListNotFoundError, TaskNotFoundError


@pytest.fixture()
def service(task_lists, tasks) -> TaskListService:
    return TaskListService(lists=task_lists, tasks=tasks)


def test_delete_list_cascades_to_tasks(service: TaskListService, tasks) -> None:
    task_list = service.create_list(1, "Home")
    service.create_task(1, task_list.id, "Dishes")
    service.create_task(1, task_list.id, "Laundry")

    removed = service.delete_list(1, task_list.id)

    assert removed.id == task_list.id
    assert tasks.list_for_list(task_list.id) == []


def test_other_users_list_is_not_found(service: TaskListService) -> None:
    task_list = service.create_list(1, "Home")

    with pytest.raises(ListNotFoundError):
        service.list_tasks(2, task_list.id)
    with pytest.raises(ListNotFoundError):
        service.rename_list(2, task_list.id, "Mine now")


def test_update_missing_task(service: TaskListService) -> None:
    task_list = service.create_list(1, "Home")

    with pytest.raises(TaskNotFoundError):
        service.update_task(1, task_list.id, 42, completed=True)


def test_rename_without_title_keeps_list(service: TaskListService) -> None:
    task_list = service.create_list(1, "Home")

    assert service.rename_list(1, task_list.id, None) == task_list


def test_blank_title_violates_invariant() -> None:
    with pytest.raises(InvariantViolation):
        TaskList(id=1, user_id=1, title="  ")
