# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from taskmanager.domain.tasks.entities import Task as DomainTask
from taskmanager.domain.tasks.entities import TaskList as DomainTaskList
from taskmanager.domain.tasks.repositories import TaskListRepository, TaskRepository
from taskmanager.infrastructure.db.models import Task, TaskList
from taskmanager.infrastructure.db.session import session_scope


def _list_to_domain(row: TaskList) -> DomainTaskList:
    return DomainTaskList(id=row.id, user_id=row.user_id, title=row.title)


def _task_to_domain(row: Task) -> DomainTask:
    return DomainTask(id=row.id, list_id=row.list_id, title=row.title, completed=bool(row.completed))


class SqlAlchemyTaskListRepository(TaskListRepository):
    def list_for_user(self, user_id: int) -> Sequence[DomainTaskList]:
        with session_scope() as session:
            rows = (
                session.query(TaskList)
                .filter(TaskList.user_id == user_id)
                .order_by(TaskList.id.asc())
                .all()
            )
            return [_list_to_domain(r) for r in rows]

    def get_for_user(self, user_id: int, list_id: int) -> DomainTaskList | None:
        with session_scope() as session:
            row = (
                session.query(TaskList)
                .filter(TaskList.id == list_id, TaskList.user_id == user_id)
                .first()
            )
            return _list_to_domain(row) if row else None

    def add(self, user_id: int, title: str) -> DomainTaskList:
        with session_scope() as session:
            row = TaskList(user_id=user_id, title=title)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _list_to_domain(row)

    def rename(self, user_id: int, list_id: int, title: str) -> DomainTaskList | None:
        with session_scope() as session:
            row = (
                session.query(TaskList)
                .filter(TaskList.id == list_id, TaskList.user_id == user_id)
                .first()
            )
            if not row:
                return None
            row.title = title
            session.flush()
            return _list_to_domain(row)

    def delete(self, user_id: int, list_id: int) -> DomainTaskList | None:
        with session_scope() as session:
            row = (
                session.query(TaskList)
                .filter(TaskList.id == list_id, TaskList.user_id == user_id)
                .first()
            )
            if not row:
                return None
            removed = _list_to_domain(row)
            session.delete(row)
            return removed


class SqlAlchemyTaskRepository(TaskRepository):
    def list_for_list(self, list_id: int) -> Sequence[DomainTask]:
        with session_scope() as session:
            rows = session.query(Task).filter(Task.list_id == list_id).order_by(Task.id.asc()).all()
            return [_task_to_domain(r) for r in rows]

    def add(self, list_id: int, title: str) -> DomainTask:
        with session_scope() as session:
            row = Task(list_id=list_id, title=title, completed=False)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _task_to_domain(row)

    def update(
        self,
        list_id: int,
        task_id: int,
        *,
        title: str | None = None,
        completed: bool | None = None,
    ) -> DomainTask | None:
        with session_scope() as session:
            row = session.query(Task).filter(Task.id == task_id, Task.list_id == list_id).first()
            if not row:
                return None
            if title is not None:
                row.title = title
            if completed is not None:
                row.completed = completed
            session.flush()
            return _task_to_domain(row)

    def delete(self, list_id: int, task_id: int) -> DomainTask | None:
        with session_scope() as session:
            row = session.query(Task).filter(Task.id == task_id, Task.list_id == list_id).first()
            if not row:
                return None
            removed = _task_to_domain(row)
            session.delete(row)
            return removed

    def delete_for_list(self, list_id: int) -> int:
        with session_scope() as session:
            return (
                session.query(Task)
                .filter(Task.list_id == list_id)
                .delete(synchronize_session=False)
            )
