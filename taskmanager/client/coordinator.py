# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Single-flight access-token refresh.

Every caller that hits a 401 asks the coordinator for a fresh token. The
first caller starts one refresh task; everyone else awaits that same task, so
at most one refresh request is outstanding. The check-and-set of the in-flight
task has no ``await`` in between, which keeps it atomic on one event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from taskmanager.client.exceptions import SessionTerminatedError
from taskmanager.client.session import ClientSession
from taskmanager.shared.logging import logger


class RefreshCoordinator:
    def __init__(
        self,
        *,
        refresh: Callable[[], Awaitable[str]],
        session: ClientSession,
    ) -> None:
        self._refresh = refresh
        self._session = session
        self._inflight: asyncio.Task[str] | None = None

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None

    async def refresh_access_token(self) -> str:
        if self._inflight is None:
            self._inflight = asyncio.get_running_loop().create_task(self._run())
            logger.debug("client.refresh: started")
        else:
            logger.debug("client.refresh: joining in-flight refresh")
        # A cancelled waiter must not cancel the shared refresh
        return await asyncio.shield(self._inflight)

    async def _run(self) -> str:
        try:
            token = await self._refresh()
        except SessionTerminatedError:
            self._session.logout()
            raise
        except Exception as exc:
            logger.warning(f"client.refresh: failed ({type(exc).__name__})")
            self._session.logout()
            raise SessionTerminatedError("access token refresh failed") from exc
        finally:
            self._inflight = None

        self._session.set_access_token(token)
        logger.info("client.refresh: access token refreshed")
        return token

    async def close(self) -> None:
        task, self._inflight = self._inflight, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except (asyncio.CancelledError, SessionTerminatedError):
            pass


__all__ = ["RefreshCoordinator"]
