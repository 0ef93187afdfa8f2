# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from taskmanager.shared.logging import logger


class ClientSession:
    """In-memory holder for the current access token.

    The token is never persisted. ``logout`` clears it at once; requests
    already in flight keep whatever headers they were sent with.
    """

    def __init__(self, *, on_logout: Callable[[], None] | None = None) -> None:
        self._access_token: str | None = None
        self._on_logout = on_logout

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    def start(self, access_token: str) -> None:
        self._access_token = access_token
        logger.debug("client.session: started")

    def set_access_token(self, access_token: str) -> None:
        self._access_token = access_token

    def logout(self) -> None:
        self._access_token = None
        logger.info("client.session: logged out")
        if self._on_logout is not None:
            self._on_logout()


__all__ = ["ClientSession"]
