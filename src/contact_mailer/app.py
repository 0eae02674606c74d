"""
Flask Application Factory.

Creates and configures the Flask application.
"""

import signal
import sys
from typing import Optional

from flask import Flask

from contact_mailer.api.cors import setup_cors
from contact_mailer.api.routes import (
    DISPATCHER_EXTENSION,
    api_bp,
    register_error_handlers,
)
from contact_mailer.config import Settings, settings as default_settings
from contact_mailer.infrastructure.http import ResendClient
from contact_mailer.infrastructure.logging import log_request_context, logger
from contact_mailer.infrastructure.metrics import setup_metrics_middleware
from contact_mailer.services import EmailRenderer, NotificationDispatcher


def _handle_sigterm(signum: int, frame) -> None:
    """Handle SIGTERM for graceful shutdown."""
    logger.info(
        "Received SIGTERM, shutting down gracefully",
        extra={"extra_fields": {"signal": signum}}
    )
    sys.exit(0)


signal.signal(signal.SIGTERM, _handle_sigterm)


def _warn_on_missing_configuration(app_settings: Settings) -> None:
    """The service still starts so that /health stays reachable."""
    if not app_settings.resend.is_configured:
        logger.warning(
            "RESEND_API_KEY is not configured, contact emails will fail",
            extra={"extra_fields": {"config_name": "RESEND_API_KEY"}}
        )
    if not app_settings.mail.admin_email:
        logger.warning(
            "ADMIN_EMAIL is not configured, admin notifications will fail",
            extra={"extra_fields": {"config_name": "ADMIN_EMAIL"}}
        )


def create_app(
    config: Optional[dict] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
    app_settings: Optional[Settings] = None,
) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Optional Flask configuration overrides.
        dispatcher: Dispatcher handling contact submissions.
        app_settings: Settings to build the app from.

    Returns:
        Configured Flask application.
    """
    app_settings = app_settings or default_settings

    app = Flask(__name__)
    app.json.sort_keys = False

    app.config["SERVICE_NAME"] = app_settings.service_name
    if config:
        app.config.update(config)

    log_request_context(app)
    setup_metrics_middleware(app)
    setup_cors(app, app_settings.cors)

    app.extensions[DISPATCHER_EXTENSION] = dispatcher or NotificationDispatcher(
        transport=ResendClient(app_settings.resend),
        renderer=EmailRenderer(business=app_settings.business),
        mail_settings=app_settings.mail,
    )

    app.register_blueprint(api_bp, url_prefix=app_settings.api_prefix or None)
    register_error_handlers(app)

    _warn_on_missing_configuration(app_settings)

    logger.info(
        "Application initialized",
        extra={"extra_fields": {
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "api_prefix": app_settings.api_prefix,
            "email_configured": app_settings.resend.is_configured,
            "cors_origins": list(app_settings.cors.origins),
        }}
    )

    return app


app = create_app()


if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=default_settings.port,
        debug=default_settings.environment == "development",
    )
