"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from taskmanager.application.services.password_hashing import WerkzeugPasswordHasher
from taskmanager.application.services.session_manager import SessionManager
from taskmanager.application.services.task_lists import TaskListService
from taskmanager.application.services.token_service import TokenService, TokenSigningConfig
from taskmanager.application.use_cases.users.login_user import LoginUserUseCase
from taskmanager.application.use_cases.users.logout_user import LogoutUserUseCase
from taskmanager.application.use_cases.users.refresh_access_token import (
    RefreshAccessTokenUseCase,
)
from taskmanager.application.use_cases.users.register_user import RegisterUserUseCase
from taskmanager.infrastructure.repositories.tasks import (
    SqlAlchemyTaskListRepository,
    SqlAlchemyTaskRepository,
)
from taskmanager.infrastructure.repositories.users import SqlAlchemyUserRepository
from taskmanager.interfaces.http.controllers.auth_controller import AuthController
from taskmanager.interfaces.http.controllers.lists_controller import ListsController
from taskmanager.interfaces.http.gates import AuthGates
from taskmanager.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def signing_config(self) -> TokenSigningConfig:
        return TokenSigningConfig.from_settings(self.config.auth)

    @cached_property
    def token_service(self) -> TokenService:
        return TokenService(self.signing_config)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def task_list_repository(self) -> SqlAlchemyTaskListRepository:
        return SqlAlchemyTaskListRepository()

    @cached_property
    def task_repository(self) -> SqlAlchemyTaskRepository:
        return SqlAlchemyTaskRepository()

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            users=self.user_repository,
            tokens=self.token_service,
            session_ttl=timedelta(days=self.config.auth.session_ttl_days),
        )

    @cached_property
    def gates(self) -> AuthGates:
        return AuthGates(
            tokens=self.token_service,
            sessions=self.session_manager,
            settings=self.config.auth,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            sessions=self.session_manager,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_manager,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def refresh_access_token_use_case(self) -> RefreshAccessTokenUseCase:
        return RefreshAccessTokenUseCase(tokens=self.token_service)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_manager)

    @cached_property
    def task_list_service(self) -> TaskListService:
        return TaskListService(lists=self.task_list_repository, tasks=self.task_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            gates=self.gates,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            refresh_use_case=self.refresh_access_token_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def lists_controller(self) -> ListsController:
        return ListsController(gates=self.gates, service=self.task_list_service)
