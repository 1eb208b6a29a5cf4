# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS

from fittrack.infrastructure.admin_setup import setup_admin_user
from fittrack.infrastructure.container import container
from fittrack.infrastructure.db import init_db
from fittrack.shared.config import load_config
from fittrack.shared.logging import logger, setup_logging
from fittrack.shared.middleware.error_handler import configure_error_handling
from fittrack.shared.middleware.request_logger import configure_request_logging

_config = load_config()


def create_app() -> Flask:
    init_db()
    setup_logging(debug_mode=_config.debug_logging)

    setup_admin_user()

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    cors_kwargs: dict[str, object] = {"origins": _config.security.allowed_origins}
    if any(o != "*" for o in _config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )
        resp.headers.setdefault("Cache-Control", "no-store")

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    @app.cli.command("purge-sessions")
    def _purge_sessions() -> None:
        """Delete session rows whose expiry has passed."""
        removed = container.session_repository.purge_expired()
        print(f"Removed {removed} expired sessions")

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
