# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from taskmanager.domain.exceptions import InvariantViolation


def _require_title(title: str) -> None:
    if not isinstance(title, str) or not title.strip():
        raise InvariantViolation("title must be a non-empty string", field="title")


@dataclass(slots=True, frozen=True)
class TaskList:
    id: int
    user_id: int
    title: str

    def __post_init__(self) -> None:
        _require_title(self.title)

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "title": self.title, "userId": self.user_id}


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    list_id: int
    title: str
    completed: bool = False

    def __post_init__(self) -> None:
        _require_title(self.title)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "listId": self.list_id,
            "completed": self.completed,
        }
