# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from taskmanager.application.services.task_lists import TaskListService
from taskmanager.interfaces.http.dto.tasks import (
    CreateListDTO,
    CreateTaskDTO,
    MessageDTO,
    UpdateListDTO,
    UpdateTaskDTO,
)
from taskmanager.interfaces.http.gates import AuthGates, current_user_id
from taskmanager.shared.errors.validation import raise_validation_error
from taskmanager.shared.logging import logger


def _parse(dto_cls):
    try:
        return dto_cls.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class ListsController:
    def __init__(self, *, gates: AuthGates, service: TaskListService) -> None:
        self._gates = gates
        self._service = service

    def as_blueprint(self) -> Blueprint:
        guard = self._gates.access_token_required
        bp = Blueprint("lists", __name__)
        bp.add_url_rule("/lists", endpoint="list_lists", view_func=guard(self.list_lists), methods=["GET"])
        bp.add_url_rule("/lists", endpoint="create_list", view_func=guard(self.create_list), methods=["POST"])
        bp.add_url_rule(
            "/lists/<int:list_id>",
            endpoint="update_list",
            view_func=guard(self.update_list),
            methods=["PATCH"],
        )
        bp.add_url_rule(
            "/lists/<int:list_id>",
            endpoint="delete_list",
            view_func=guard(self.delete_list),
            methods=["DELETE"],
        )
        bp.add_url_rule(
            "/lists/<int:list_id>/tasks",
            endpoint="list_tasks",
            view_func=guard(self.list_tasks),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/lists/<int:list_id>/tasks",
            endpoint="create_task",
            view_func=guard(self.create_task),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/lists/<int:list_id>/tasks/<int:task_id>",
            endpoint="update_task",
            view_func=guard(self.update_task),
            methods=["PATCH"],
        )
        bp.add_url_rule(
            "/lists/<int:list_id>/tasks/<int:task_id>",
            endpoint="delete_task",
            view_func=guard(self.delete_task),
            methods=["DELETE"],
        )
        return bp

    def list_lists(self):
        t0 = perf_counter()
        user_id = current_user_id()
        items = self._service.list_lists(user_id)
        dt = (perf_counter() - t0) * 1000
        logger.info(f"lists.list: ok (user_id={user_id}, n={len(items)}, dt_ms={dt:.0f})")
        return jsonify([item.to_dict() for item in items])

    def create_list(self):
        user_id = current_user_id()
        dto = _parse(CreateListDTO)
        created = self._service.create_list(user_id, dto.title)
        logger.info(f"lists.create: ok (user_id={user_id}, list_id={created.id})")
        return jsonify(created.to_dict())

    def update_list(self, list_id: int):
        user_id = current_user_id()
        dto = _parse(UpdateListDTO)
        self._service.rename_list(user_id, list_id, dto.title)
        logger.info(f"lists.update: ok (user_id={user_id}, list_id={list_id})")
        return jsonify(MessageDTO(message="updated successfully").model_dump())

    def delete_list(self, list_id: int):
        user_id = current_user_id()
        removed = self._service.delete_list(user_id, list_id)
        logger.info(f"lists.delete: ok (user_id={user_id}, list_id={list_id})")
        return jsonify(removed.to_dict())

    def list_tasks(self, list_id: int):
        t0 = perf_counter()
        user_id = current_user_id()
        items = self._service.list_tasks(user_id, list_id)
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"tasks.list: ok (user_id={user_id}, list_id={list_id}, n={len(items)}, dt_ms={dt:.0f})"
        )
        return jsonify([item.to_dict() for item in items])

    def create_task(self, list_id: int):
        user_id = current_user_id()
        dto = _parse(CreateTaskDTO)
        created = self._service.create_task(user_id, list_id, dto.title)
        logger.info(f"tasks.create: ok (user_id={user_id}, list_id={list_id}, task_id={created.id})")
        return jsonify(created.to_dict())

    def update_task(self, list_id: int, task_id: int):
        user_id = current_user_id()
        dto = _parse(UpdateTaskDTO)
        self._service.update_task(
            user_id, list_id, task_id, title=dto.title, completed=dto.completed
        )
        logger.info(f"tasks.update: ok (user_id={user_id}, task_id={task_id})")
        return jsonify(MessageDTO(message="updated successfully").model_dump())

    def delete_task(self, list_id: int, task_id: int):
        user_id = current_user_id()
        removed = self._service.delete_task(user_id, list_id, task_id)
        logger.info(f"tasks.delete: ok (user_id={user_id}, task_id={task_id})")
        return jsonify(removed.to_dict())
