"""
Custom exceptions for the contact mailer service.

Provides a hierarchy of infrastructure exceptions for error handling
and HTTP status code mapping. Validation failures are reported as
dispatch outcomes rather than raised.
"""

from typing import Optional


class ContactMailerError(Exception):
    """Base exception for all contact mailer errors."""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Infrastructure Errors (5xx)
# =============================================================================

class InfrastructureError(ContactMailerError):
    """Base exception for infrastructure errors (typically 5xx)."""
    pass


class ConfigurationError(InfrastructureError):
    """Raised when a required configuration is missing."""
    
    def __init__(self, config_name: str, message: Optional[str] = None):
        msg = message or f"Configuration missing: {config_name}"
        super().__init__(msg, {"config_name": config_name})
        self.config_name = config_name


class ExternalServiceError(InfrastructureError):
    """Raised when an external service call fails."""
    
    def __init__(
        self,
        service_name: str,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__(
            f"{service_name} error: {message}",
            {
                "service_name": service_name,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }
        )
        self.service_name = service_name
        self.status_code = status_code
        self.duration_ms = duration_ms


class EmailTransportError(ExternalServiceError):
    """Raised when the Resend API rejects or fails to accept an email."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__("Resend", message, status_code, duration_ms)


class EmailRejectedError(EmailTransportError):
    """
    Raised when Resend refuses one message with a 4xx reply (429 excluded).

    The provider itself is healthy, so this does not count against the
    circuit breaker.
    """
    pass
