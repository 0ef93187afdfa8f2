# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_task_repository import SqlAlchemyTaskListRepository, SqlAlchemyTaskRepository

__all__ = ["SqlAlchemyTaskListRepository", "SqlAlchemyTaskRepository"]
