# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from taskmanager.application.use_cases.users.login_user import LoginUserUseCase
from taskmanager.application.use_cases.users.logout_user import LogoutUserUseCase
from taskmanager.application.use_cases.users.refresh_access_token import (
    RefreshAccessTokenUseCase,
)
from taskmanager.application.use_cases.users.register_user import RegisterUserUseCase
from taskmanager.domain.users.exceptions import InvalidCredentialsError, SignupFailedError
from taskmanager.infrastructure.audit import AuditAction, audit_log
from taskmanager.interfaces.http.cookies import clear_auth_cookies, set_auth_cookies
from taskmanager.interfaces.http.dto.auth import (
    AccessTokenDTO,
    LoginRequestDTO,
    LogoutDTO,
    SignupRequestDTO,
    UserProfileDTO,
)
from taskmanager.interfaces.http.gates import AuthGates, current_refresh_token, current_user
from taskmanager.shared.config import load_config
from taskmanager.shared.errors.validation import raise_validation_error
from taskmanager.shared.logging import logger
from taskmanager.shared.middleware.client import client_ip
from taskmanager.shared.middleware.csrf import csrf_required
from taskmanager.shared.middleware.rate_limit import rate_limit

# One limiter for signup, login and refresh, keyed per path and client
_auth_rate_limit = rate_limit()


class AuthController:
    def __init__(
        self,
        *,
        gates: AuthGates,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        refresh_use_case: RefreshAccessTokenUseCase,
        logout_use_case: LogoutUserUseCase,
    ) -> None:
        self._gates = gates
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._refresh_use_case = refresh_use_case
        self._logout_use_case = logout_use_case

    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignupRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()
        try:
            issued = self._register_use_case.execute(dto.email, dto.password)
        except SignupFailedError:
            audit_log(AuditAction.REGISTER_FAILED, ip_address=ip_address, success=False)
            raise

        audit_log(AuditAction.REGISTER, user_id=issued.user.id, ip_address=ip_address)

        profile = UserProfileDTO(id=issued.user.id, email=issued.user.email)
        response = jsonify(profile.model_dump())
        set_auth_cookies(
            response,
            refresh_token=issued.refresh_token,
            csrf_token=issued.csrf_token,
            access_token=issued.access_token,
        )
        logger.info(f"auth.signup: ok user_id={issued.user.id}")
        return response, 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()
        try:
            issued = self._login_use_case.execute(dto.email, dto.password)
        except InvalidCredentialsError:
            audit_log(AuditAction.LOGIN_FAILED, ip_address=ip_address, success=False)
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=issued.user.id, ip_address=ip_address)

        profile = UserProfileDTO(id=issued.user.id, email=issued.user.email)
        response = jsonify(profile.model_dump())
        set_auth_cookies(
            response,
            refresh_token=issued.refresh_token,
            csrf_token=issued.csrf_token,
            access_token=issued.access_token,
        )
        logger.info(f"auth.login: ok user_id={issued.user.id}")
        return response, 200

    def refresh(self) -> tuple[Response, int]:
        user = current_user()
        issued = self._refresh_use_case.execute(user, current_refresh_token())

        audit_log(AuditAction.ACCESS_TOKEN_REFRESHED, user_id=user.id, ip_address=client_ip())

        response = jsonify(AccessTokenDTO(accessToken=issued.access_token).model_dump())
        set_auth_cookies(
            response,
            refresh_token=issued.refresh_token,
            csrf_token=issued.csrf_token,
            access_token=issued.access_token,
        )
        logger.info(f"auth.refresh: ok user_id={user.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        refresh_token = request.cookies.get(load_config().auth.refresh_cookie)
        user_id = self._logout_use_case.execute(refresh_token)

        audit_log(AuditAction.LOGOUT, user_id=user_id, ip_address=client_ip())

        response = jsonify(LogoutDTO().model_dump())
        clear_auth_cookies(response)
        logger.info(f"auth.logout: ok user_id={user_id}")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        refresh_path = load_config().auth.refresh_path
        bp = Blueprint("auth", __name__)
        bp.add_url_rule(
            "/users",
            endpoint="signup",
            view_func=_auth_rate_limit(self.signup),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/users/login",
            endpoint="login",
            view_func=_auth_rate_limit(self.login),
            methods=["POST"],
        )
        bp.add_url_rule(
            refresh_path,
            endpoint="refresh",
            view_func=_auth_rate_limit(self._gates.session_required(csrf_required(self.refresh))),
            methods=["POST"],
        )
        bp.add_url_rule(
            refresh_path,
            endpoint="logout",
            view_func=csrf_required(self.logout),
            methods=["DELETE"],
        )
        return bp
