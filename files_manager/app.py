# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import atexit

from flask import Flask

from files_manager.infrastructure.container import Container
from files_manager.shared.config import load_config
from files_manager.shared.logging import logger, setup_logging
from files_manager.shared.middleware.error_handler import configure_error_handling
from files_manager.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None, *, start: bool = True) -> Flask:
    container = container or Container()
    setup_logging(debug_mode=container.config.debug_logging)

    if start:
        container.start()

    app = Flask(__name__)
    app.extensions["files_manager.container"] = container
    debug_mode = container.config.debug_logging
    configure_error_handling(app, debug_mode=debug_mode)
    configure_request_logging(app, debug_mode=debug_mode)

    app.register_blueprint(container.app_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    logger.info("Flask app initialized")
    return app


def main() -> None:
    config = load_config()
    container = Container(config)
    app = create_app(container)
    atexit.register(container.shutdown)
    logger.info(f"Server running on port {config.port} env={config.app_env}")
    app.run(host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    main()
