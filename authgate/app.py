# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask, Response
from flask_cors import CORS

from authgate.container import Container
from authgate.infrastructure.db import init_db
from authgate.shared.config import AppConfig, load_config
from authgate.shared.errors import register_error_handler
from authgate.shared.logging import logger, setup_logging
from authgate.shared.middleware.request_logger import configure_request_logging

CONTAINER_KEY = "authgate.container"


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    setup_logging(debug_mode=config.debug_logging)

    container = container or Container(config)
    init_db(container.engine)

    app = Flask(__name__)
    register_error_handler(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    container.interceptor_chain.install(app)

    CORS(
        app,
        resources={r"/*": {"origins": config.security.allowed_origins}},
        expose_headers=["Authorization"],
    )

    app.register_blueprint(container.main_controller.as_blueprint())
    app.register_blueprint(container.admin_controller.as_blueprint())
    app.register_blueprint(container.join_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    app.extensions[CONTAINER_KEY] = container
    logger.info(f"Flask app initialized env={config.app_env}")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
