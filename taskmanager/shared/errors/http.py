# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from taskmanager.shared.config import load_config
from taskmanager.shared.logging import logger
from taskmanager.shared.middleware.client import client_ip

from .base import AppError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def _http_error_code(exc: HTTPException) -> str:
    return (exc.name or "http_error").lower().replace(" ", "_")


def register_error_handler(
    app: Flask, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error("{} on {} context={}", exc.code, where, dict(exc.context or {}))
        else:
            # Expired tokens are routine
            logger.debug("{} ({}) on {}", exc.code, int(exc.status), where)
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return jsonify({"error": _http_error_code(exc)}), exc.code or default_status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if verbose:
            logger.opt(exception=exc).error(
                "unhandled {} on {} {} from {} user={}",
                type(exc).__name__,
                request.method,
                request.path,
                client_ip(),
                g.get("user_id"),
            )
        else:
            logger.error("unhandled {} on {} {}", type(exc).__name__, request.method, request.path)
        return jsonify({"error": "internal_error"}), default_status
