from __future__ import annotations

import os
import tempfile
from datetime import UTC, datetime

import pytest

# Must be in place before taskmanager.shared.config is first imported
_TMP = tempfile.mkdtemp(prefix="taskmanager-tests-")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP, 'test.db')}")
os.environ.setdefault("JWT_SECRET", "unit-test-signing-key-0123456789abcdef")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP, "taskmanager.log"))
os.environ.setdefault("ENABLE_RATE_LIMIT", "0")

from taskmanager.application.services.session_manager import SessionManager  # noqa: E402
from taskmanager.application.services.token_service import (  # noqa: E402
    TokenService,
    TokenSigningConfig,
)
from taskmanager.domain.tasks.entities import Task, TaskList  # noqa: E402
from taskmanager.domain.users.entities import Session, User  # noqa: E402
from taskmanager.domain.users.repositories import PasswordHasher, UserRepository  # noqa: E402

SECRET = os.environ["JWT_SECRET"]


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        new_user = User(
            id=self._seq,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def _replace_sessions(self, user_id: int, sessions: tuple[Session, ...]) -> None:
        user = self._users[user_id]
        self._users[user_id] = User(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
            sessions=sessions,
        )

    def add_session(self, user_id: int, session: Session) -> None:
        self._replace_sessions(user_id, self._users[user_id].sessions + (session,))

    def remove_session(self, user_id: int, token: str) -> bool:
        user = self._users.get(user_id)
        if user is None:
            return False
        kept = tuple(s for s in user.sessions if s.token != token)
        self._replace_sessions(user_id, kept)
        return len(kept) != len(user.sessions)

    def purge_expired_sessions(self, user_id: int, now: datetime) -> int:
        user = self._users[user_id]
        kept = tuple(s for s in user.sessions if s.expires_at > now)
        self._replace_sessions(user_id, kept)
        return len(user.sessions) - len(kept)


class InMemoryTaskListRepository:
    def __init__(self) -> None:
        self._lists: dict[int, TaskList] = {}
        self._seq = 1

    def list_for_user(self, user_id: int) -> list[TaskList]:
        return [item for item in self._lists.values() if item.user_id == user_id]

    def get_for_user(self, user_id: int, list_id: int) -> TaskList | None:
        item = self._lists.get(list_id)
        return item if item and item.user_id == user_id else None

    def add(self, user_id: int, title: str) -> TaskList:
        item = TaskList(id=self._seq, user_id=user_id, title=title)
        self._seq += 1
        self._lists[item.id] = item
        return item

    def rename(self, user_id: int, list_id: int, title: str) -> TaskList | None:
        if self.get_for_user(user_id, list_id) is None:
            return None
        self._lists[list_id] = TaskList(id=list_id, user_id=user_id, title=title)
        return self._lists[list_id]

    def delete(self, user_id: int, list_id: int) -> TaskList | None:
        if self.get_for_user(user_id, list_id) is None:
            return None
        return self._lists.pop(list_id)


class InMemoryTaskRepository:
    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._seq = 1

    def list_for_list(self, list_id: int) -> list[Task]:
        return [task for task in self._tasks.values() if task.list_id == list_id]

    def add(self, list_id: int, title: str) -> Task:
        task = Task(id=self._seq, list_id=list_id, title=title)
        self._seq += 1
        self._tasks[task.id] = task
        return task

    def update(self, list_id, task_id, *, title=None, completed=None) -> Task | None:
        task = self._tasks.get(task_id)
        if task is None or task.list_id != list_id:
            return None
        self._tasks[task_id] = Task(
            id=task.id,
            list_id=list_id,
            title=task.title if title is None else title,
            completed=task.completed if completed is None else completed,
        )
        return self._tasks[task_id]

    def delete(self, list_id: int, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        if task is None or task.list_id != list_id:
            return None
        return self._tasks.pop(task_id)

    def delete_for_list(self, list_id: int) -> int:
        doomed = [tid for tid, task in self._tasks.items() if task.list_id == list_id]
        for tid in doomed:
            del self._tasks[tid]
        return len(doomed)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class FakeClock:
    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def signing() -> TokenSigningConfig:
    return TokenSigningConfig(secret=SECRET)


@pytest.fixture()
def token_service(signing: TokenSigningConfig) -> TokenService:
    return TokenService(signing)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime.now(UTC))


@pytest.fixture()
def session_manager(
    users: InMemoryUserRepository, token_service: TokenService, clock: FakeClock
) -> SessionManager:
    return SessionManager(users=users, tokens=token_service, clock=clock)


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def task_lists() -> InMemoryTaskListRepository:
    return InMemoryTaskListRepository()


@pytest.fixture()
def tasks() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture()
def make_user(users: InMemoryUserRepository, hasher: DeterministicHasher):
    def _make(email: str = "a@x.com", password: str = "longenough1") -> User:
        return users.add(
            User(
                id=0,
                email=email,
                password_hash=hasher.hash(password),
                created_at=datetime.now(UTC),
            )
        )

    return _make
