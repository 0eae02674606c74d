"""
Services Layer.

Business logic orchestration:
- Email rendering
- Contact submission dispatch
"""

from contact_mailer.services.dispatcher import (
    DispatchFailed,
    DispatchOutcome,
    DispatchSucceeded,
    NotificationDispatcher,
    ValidationFailed,
)
from contact_mailer.services.renderer import EmailRenderer, RenderedEmail


__all__ = [
    "DispatchFailed",
    "DispatchOutcome",
    "DispatchSucceeded",
    "EmailRenderer",
    "NotificationDispatcher",
    "RenderedEmail",
    "ValidationFailed",
]
