"""
HTTP Client Package.

External service clients:
- Resend email API
"""

from contact_mailer.infrastructure.http.resend_client import (
    EmailMessage,
    get_resend_client,
    ResendClient,
    SendResult,
)


__all__ = [
    "EmailMessage",
    "get_resend_client",
    "ResendClient",
    "SendResult",
]
