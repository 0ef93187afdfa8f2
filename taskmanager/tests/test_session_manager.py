from __future__ import annotations

from datetime import timedelta

from taskmanager.application.services.session_manager import SessionManager


def test_create_session_then_lookup_returns_same_user(session_manager: SessionManager, make_user) -> None:
    user = make_user()

    refresh_token = session_manager.create_session(user)
    found = session_manager.find_user_by_refresh_token(refresh_token)

    assert found is not None
    assert found.id == user.id
    assert found.email == user.email


def test_session_expires_after_ttl(session_manager: SessionManager, users, make_user, clock) -> None:
    user = make_user()
    refresh_token = session_manager.create_session(user)

    stored = users.find_by_id(user.id)
    session = session_manager.find_session(stored, refresh_token)

    assert session is not None
    assert session.expires_at == clock.now + timedelta(days=10)
    assert not session_manager.is_session_expired(session.expires_at)

    clock.now = session.expires_at
    assert session_manager.is_session_expired(session.expires_at)


def test_unknown_or_forged_token_finds_nobody(session_manager: SessionManager, token_service, make_user) -> None:
    user = make_user()
    session_manager.create_session(user)

    assert session_manager.find_user_by_refresh_token("nope") is None
    assert session_manager.find_user_by_refresh_token(token_service.sign_refresh_token(user.id, "f" * 64)) is None
    assert session_manager.find_user_by_refresh_token(token_service.sign_refresh_token(999, "f" * 64)) is None


def test_find_session_rejects_token_of_another_user(session_manager: SessionManager, users, make_user) -> None:
    alice = make_user("alice@x.com")
    bob = make_user("bob@x.com")
    alice_token = session_manager.create_session(alice)

    assert session_manager.find_session(users.find_by_id(bob.id), alice_token) is None


def test_many_concurrent_sessions_per_user(session_manager: SessionManager, users, make_user) -> None:
    user = make_user()
    first = session_manager.create_session(user)
    second = session_manager.create_session(user)

    assert first != second
    assert len(users.find_by_id(user.id).sessions) == 2
    assert session_manager.find_user_by_refresh_token(first) is not None
    assert session_manager.find_user_by_refresh_token(second) is not None


def test_remove_session_revokes_only_that_session(session_manager: SessionManager, users, make_user) -> None:
    user = make_user()
    first = session_manager.create_session(user)
    second = session_manager.create_session(user)

    assert session_manager.remove_session(user, first) is True
    assert session_manager.remove_session(user, first) is False

    assert session_manager.find_user_by_refresh_token(first) is None
    assert session_manager.find_user_by_refresh_token(second) is not None


def test_create_session_purges_expired_sessions(session_manager: SessionManager, users, make_user, clock) -> None:
    user = make_user()
    stale = session_manager.create_session(user)

    clock.now = clock.now + timedelta(days=11)
    fresh = session_manager.create_session(user)

    sessions = users.find_by_id(user.id).sessions
    assert len(sessions) == 1
    assert session_manager.find_user_by_refresh_token(stale) is None
    assert session_manager.find_user_by_refresh_token(fresh) is not None
