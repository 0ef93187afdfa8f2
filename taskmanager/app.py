# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import importlib
from typing import Any, Protocol, cast

from flask import Flask

from taskmanager.container import Container
from taskmanager.infrastructure.db import init_db
from taskmanager.interfaces.http.controllers.misc_controller import MiscController
from taskmanager.shared.errors import ConfigurationError
from taskmanager.shared.logging import logger, setup_logging
from taskmanager.shared.middleware.error_handler import configure_error_handling
from taskmanager.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging(
        "DEBUG" if config.debug_logging else config.log_level,
        log_file=config.log_file,
        debug=config.debug_logging,
    )

    if not container.signing_config.is_configured:
        logger.error("JWT_SECRET is not configured; refusing to start")
        raise ConfigurationError("JWT_SECRET")

    init_db()

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    auth = config.auth
    CORS(
        app,
        origins=config.security.allowed_origins,
        supports_credentials=True,
        allow_headers=["Content-Type", auth.access_token_header, auth.csrf_header],
        expose_headers=[auth.access_token_header],
        methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    )

    app.register_blueprint(MiscController().as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.lists_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=3000, debug=True)
