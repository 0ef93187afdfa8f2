"""Use-case for revoking a refresh session."""

from __future__ import annotations

from taskmanager.application.services.session_manager import SessionManager


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionManager) -> None:
        self._sessions = sessions

    def execute(self, refresh_token: str | None) -> int | None:
        if not refresh_token:
            return None
        user = self._sessions.find_user_by_refresh_token(refresh_token)
        if user is None:
            return None
        self._sessions.remove_session(user, refresh_token)
        return user.id
