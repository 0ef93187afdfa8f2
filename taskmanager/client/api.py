# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

import httpx

from taskmanager.client.coordinator import RefreshCoordinator
from taskmanager.client.exceptions import (
    AuthenticationFailedError,
    ClientError,
    SessionTerminatedError,
)
from taskmanager.client.interceptor import ACCESS_TOKEN_HEADER, CSRF_COOKIE, apply_auth_headers
from taskmanager.client.session import ClientSession
from taskmanager.shared.logging import logger

REFRESH_PATH = "/auth/token/refresh"


def _error_code(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("error") if isinstance(body, dict) else None


class TaskManagerClient:
    """Async HTTP client for the task manager API.

    Attaches the access token and CSRF echo to every request, refreshes the
    access token once on a 401 and resubmits the request a single time.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: ClientSession | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | httpx.Timeout = 10.0,
    ) -> None:
        self.session = session or ClientSession()
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self._coordinator = RefreshCoordinator(
            refresh=self.get_new_access_token, session=self.session
        )

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    @property
    def cookies(self) -> httpx.Cookies:
        return self._http.cookies

    async def __aenter__(self) -> "TaskManagerClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._coordinator.close()
        await self._http.aclose()

    def _csrf_token(self) -> str | None:
        return self._http.cookies.get(CSRF_COOKIE)

    async def _dispatch(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        # Rebuilt on every attempt so the Cookie header follows the jar
        request = self._http.build_request(method, url, **kwargs)
        request = apply_auth_headers(request, self.session.access_token, self._csrf_token())
        return await self._http.send(request)

    def _is_refresh_url(self, url: httpx.URL) -> bool:
        return url.path.endswith(REFRESH_PATH)

    def _terminate(self, reason: str) -> SessionTerminatedError:
        self.session.logout()
        return SessionTerminatedError(reason, status_code=401)

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._dispatch(method, url, **kwargs)
        if response.status_code != 401:
            return response

        if self._is_refresh_url(response.request.url):
            raise self._terminate("refresh endpoint rejected the session")

        logger.debug(f"client.request: 401 on {method} {url}, refreshing")
        await self._coordinator.refresh_access_token()

        retried = await self._dispatch(method, url, **kwargs)
        if retried.status_code == 401:
            raise self._terminate("request rejected after token refresh")
        return retried

    async def get_new_access_token(self) -> str:
        response = await self._dispatch("POST", REFRESH_PATH)
        if response.status_code == 401:
            raise SessionTerminatedError(
                "refresh endpoint rejected the session",
                status_code=401,
                code=_error_code(response),
            )
        if response.status_code != 200:
            raise ClientError(
                "access token refresh failed",
                status_code=response.status_code,
                code=_error_code(response),
            )
        token = response.headers.get(ACCESS_TOKEN_HEADER)
        if not token:
            raise ClientError("refresh response carried no access token", status_code=200)
        return token

    async def _authenticate(self, path: str, email: str, password: str) -> httpx.Response:
        response = await self._dispatch("POST", path, json={"email": email, "password": password})
        token = response.headers.get(ACCESS_TOKEN_HEADER)
        if response.status_code != 200 or not token:
            raise AuthenticationFailedError(
                "authentication failed",
                status_code=response.status_code,
                code=_error_code(response),
            )
        self.session.start(token)
        return response

    async def signup(self, email: str, password: str) -> httpx.Response:
        response = await self._authenticate("/users", email, password)
        logger.info("client: signed up and logged in")
        return response

    async def login(self, email: str, password: str) -> httpx.Response:
        response = await self._authenticate("/users/login", email, password)
        logger.info("client: logged in")
        return response

    async def logout_request(self) -> httpx.Response:
        response = await self._dispatch("DELETE", REFRESH_PATH)
        self.session.logout()
        return response

    async def get(self, uri: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", uri, **kwargs)

    async def post(self, uri: str, payload: Any = None, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", uri, json=payload if payload is not None else {}, **kwargs)

    async def patch(self, uri: str, payload: Any = None, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", uri, json=payload if payload is not None else {}, **kwargs)

    async def delete(self, uri: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", uri, **kwargs)


__all__ = ["REFRESH_PATH", "TaskManagerClient"]
