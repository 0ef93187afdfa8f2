from __future__ import annotations

import pytest

from taskmanager.application.use_cases.users.login_user import LoginUserUseCase
from taskmanager.application.use_cases.users.logout_user import LogoutUserUseCase
from taskmanager.application.use_cases.users.refresh_access_token import RefreshAccessTokenUseCase
from taskmanager.application.use_cases.users.register_user import RegisterUserUseCase
from taskmanager.domain.users.exceptions import InvalidCredentialsError, SignupFailedError
from taskmanager.domain.users.repositories import PasswordHasher


@pytest.fixture()
def register(users, session_manager, token_service, hasher) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        users=users, sessions=session_manager, tokens=token_service, password_hasher=hasher
    )


@pytest.fixture()
def login(users, session_manager, token_service, hasher) -> LoginUserUseCase:
    return LoginUserUseCase(
        users=users, sessions=session_manager, tokens=token_service, password_hasher=hasher
    )


def test_register_user_success(register: RegisterUserUseCase, users, token_service) -> None:
    issued = register.execute("a@x.com", "longenough1")

    assert issued.user.email == "a@x.com"
    assert issued.user.password_hash == "hashed:longenough1"
    assert token_service.verify_access_token(issued.access_token) == issued.user.id
    assert len(issued.csrf_token) == 64
    assert len(users.find_by_id(issued.user.id).sessions) == 1


def test_register_user_duplicate_is_generic_failure(register: RegisterUserUseCase) -> None:
    register.execute("a@x.com", "longenough1")

    with pytest.raises(SignupFailedError) as excinfo:
        register.execute("a@x.com", "different1")

    assert excinfo.value.code == "signup_failed"
    assert excinfo.value.context is None


def test_register_user_storage_failure_is_generic(users, session_manager, token_service) -> None:
    class ExplodingHasher:
        def hash(self, password: str) -> str:
            raise RuntimeError("hash backend down")

        def verify(self, password: str, hashed: str) -> bool:
            return False

    use_case = RegisterUserUseCase(
        users=users, sessions=session_manager, tokens=token_service, password_hasher=ExplodingHasher()
    )

    with pytest.raises(SignupFailedError):
        use_case.execute("a@x.com", "longenough1")


def test_login_user_success(register, login: LoginUserUseCase, token_service) -> None:
    registered = register.execute("a@x.com", "longenough1")

    issued = login.execute("a@x.com", "longenough1")

    assert issued.user.id == registered.user.id
    assert issued.refresh_token != registered.refresh_token
    assert token_service.verify_access_token(issued.access_token) == registered.user.id


@pytest.mark.parametrize(
    ("email", "password"),
    [("a@x.com", "wrongpass1"), ("nobody@x.com", "longenough1")],
)
def test_login_user_invalid_credentials(register, login: LoginUserUseCase, email, password) -> None:
    register.execute("a@x.com", "longenough1")

    with pytest.raises(InvalidCredentialsError):
        login.execute(email, password)


def test_refresh_issues_new_access_token_and_csrf(register, token_service) -> None:
    issued = register.execute("a@x.com", "longenough1")

    refreshed = RefreshAccessTokenUseCase(tokens=token_service).execute(issued.user, issued.refresh_token)

    assert refreshed.access_token != issued.access_token
    assert refreshed.csrf_token != issued.csrf_token
    assert refreshed.refresh_token == issued.refresh_token


def test_logout_user_removes_session(register, session_manager, users) -> None:
    issued = register.execute("a@x.com", "longenough1")
    logout = LogoutUserUseCase(sessions=session_manager)

    assert logout.execute(issued.refresh_token) == issued.user.id
    assert users.find_by_id(issued.user.id).sessions == ()
    assert logout.execute(issued.refresh_token) is None
    assert logout.execute(None) is None


class RecordingHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verified: list[str] = []

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return hashed == f"hashed:{password}"


def test_login_unknown_email_still_checks_a_hash(users, session_manager, token_service) -> None:
    hasher = RecordingHasher()
    login = LoginUserUseCase(
        users=users, sessions=session_manager, tokens=token_service, password_hasher=hasher
    )

    with pytest.raises(InvalidCredentialsError):
        login.execute("nobody@x.com", "longenough1")

    assert len(hasher.verified) == 1
    assert hasher.verified[0].startswith("hashed:")
