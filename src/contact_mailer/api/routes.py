"""
Flask API Routes.

Defines the HTTP endpoints of the contact mailer and the JSON error
fallbacks shared by the whole application.
"""

from typing import Any, Dict, List, Tuple, Union

from flask import Blueprint, Flask, current_app, request
from werkzeug.exceptions import HTTPException

from contact_mailer.core.timestamps import now_utc, to_iso8601
from contact_mailer.infrastructure.logging import get_logger
from contact_mailer.infrastructure.metrics import metrics_endpoint
from contact_mailer.services import (
    DispatchFailed,
    NotificationDispatcher,
    ValidationFailed,
)


logger = get_logger(__name__)


api_bp = Blueprint("api", __name__)

DISPATCHER_EXTENSION = "contact_mailer.dispatcher"

SEND_FAILED_MESSAGE = "Failed to send contact email"
SEND_FAILED_DETAILS = "An unexpected error occurred while processing your request."


def _error_response(
    message: str,
    status_code: int,
    details: Union[str, List[str], None] = None,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized error response."""
    body: Dict[str, Any] = {
        "success": False,
        "error": message,
    }
    if details is not None:
        body["detalles"] = details
    return body, status_code


def _success_response(
    data: Dict[str, Any],
    status_code: int = 200,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized success response."""
    return {
        "success": True,
        **data,
    }, status_code


def get_dispatcher() -> NotificationDispatcher:
    """Dispatcher attached to the running application."""
    return current_app.extensions[DISPATCHER_EXTENSION]


def _request_payload() -> Any:
    """Decoded JSON body, or form fields for urlencoded posts."""
    payload = request.get_json(silent=True)
    if payload is None and request.form:
        payload = request.form.to_dict()
    return payload


# ============================================================================
# Health Check
# ============================================================================

@api_bp.route("/health", methods=["GET"])
def health_check() -> Tuple[Dict[str, Any], int]:
    """
    Health check endpoint.

    Stays available even when the email provider is not configured.
    """
    return {
        "status": "OK",
        "service": current_app.config["SERVICE_NAME"],
        "timestamp": to_iso8601(now_utc()),
    }, 200


@api_bp.route("/metrics", methods=["GET"])
def metrics():
    """
    Prometheus metrics endpoint.
    """
    return metrics_endpoint()


# ============================================================================
# Contact Endpoint
# ============================================================================

@api_bp.route("/send-contact", methods=["POST"])
def send_contact() -> Tuple[Dict[str, Any], int]:
    """
    Contact form submission.

    Request Body:
        name, email, phone, service, message (all text, phone optional).

    Returns:
        200 when both emails were sent, 400 with the broken rules, or
        500 when an email could not be sent.
    """
    try:
        outcome = get_dispatcher().handle_submission(_request_payload())
    except Exception as e:
        logger.exception(
            f"Unexpected error while handling contact submission: {e}",
            extra={"extra_fields": {"error_type": type(e).__name__}}
        )
        return _error_response(SEND_FAILED_MESSAGE, 500, SEND_FAILED_DETAILS)

    if isinstance(outcome, ValidationFailed):
        return _error_response("Validation failed", 400, outcome.errors)

    if isinstance(outcome, DispatchFailed):
        logger.error(
            f"Contact email dispatch failed at {outcome.stage} stage: {outcome.cause}",
            extra={"extra_fields": {
                "stage": outcome.stage,
                "client_notified": outcome.client_notified,
                "error_type": type(outcome.cause).__name__,
            }}
        )
        return _error_response(SEND_FAILED_MESSAGE, 500, SEND_FAILED_DETAILS)

    return _success_response({
        "message": "Inquiry sent successfully",
        "timestamp": to_iso8601(outcome.timestamp),
    })


# ============================================================================
# Error Handlers
# ============================================================================

def register_error_handlers(app: Flask) -> None:
    """
    Install JSON fallbacks for unmatched routes and unexpected errors.

    Args:
        app: Flask application instance.
    """
    @app.errorhandler(404)
    @app.errorhandler(405)
    def handle_not_found(error: HTTPException) -> Tuple[Dict[str, Any], int]:
        """Unknown path, or known path with an unsupported method."""
        return _error_response("Route not found", 404)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException) -> Tuple[Dict[str, Any], int]:
        return _error_response(error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> Tuple[Dict[str, Any], int]:
        """Handle unexpected errors (500)."""
        logger.exception(
            f"Unexpected error: {error}",
            extra={"extra_fields": {"error_type": type(error).__name__}}
        )
        return _error_response("Internal server error", 500)
