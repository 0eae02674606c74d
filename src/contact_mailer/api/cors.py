"""
Cross-Origin Resource Sharing.

Only the configured origins may call the API from a browser. Requests
without an Origin header (curl, server-to-server, mobile apps) pass.
"""

from typing import Any, Dict, Optional, Tuple

from flask import Flask, request
from flask_cors import CORS

from contact_mailer.config import CorsSettings, settings
from contact_mailer.infrastructure.logging import get_logger


logger = get_logger(__name__)


def setup_cors(app: Flask, cors_settings: Optional[CorsSettings] = None) -> None:
    """
    Apply the origin allow-list to an application.

    Allowed origins get the usual CORS response headers from flask-cors.
    Any other origin is rejected with 403 before reaching a route.

    Args:
        app: Flask application instance.
        cors_settings: Allow-list to enforce.
    """
    cors_settings = cors_settings or settings.cors

    CORS(
        app,
        origins=list(cors_settings.origins),
        methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
        supports_credentials=True,
    )

    @app.before_request
    def reject_disallowed_origin() -> Optional[Tuple[Dict[str, Any], int]]:
        origin = request.headers.get("Origin")
        if cors_settings.is_allowed(origin):
            return None

        logger.warning(
            "Request rejected by CORS policy",
            extra={"extra_fields": {
                "origin": origin,
                "path": request.path,
            }}
        )
        return {
            "success": False,
            "error": "Not allowed by CORS",
        }, 403
