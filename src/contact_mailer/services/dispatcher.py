"""
Notification Dispatcher.

Handles one contact form submission from raw payload to outcome.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Union

from contact_mailer.config import MailSettings, settings
from contact_mailer.core.catalog import ServiceCatalog, default_catalog
from contact_mailer.core.exceptions import ConfigurationError, InfrastructureError
from contact_mailer.core.submission import ContactSubmission
from contact_mailer.core.timestamps import now_utc
from contact_mailer.core.validator import validate_contact_form
from contact_mailer.infrastructure.http import EmailMessage, ResendClient, get_resend_client
from contact_mailer.infrastructure.logging import get_logger, log_duration
from contact_mailer.infrastructure.metrics import get_metrics
from contact_mailer.services.renderer import EmailRenderer, RenderedEmail


logger = get_logger(__name__)


STAGE_CLIENT = "client"
STAGE_ADMIN = "admin"


@dataclass(frozen=True)
class ValidationFailed:
    """The submission broke one or more form rules. Nothing was sent."""
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DispatchFailed:
    """
    An email could not be handed to the provider.

    Attributes:
        cause: The transport error.
        stage: Which send failed, "client" or "admin".
        client_notified: True when the client confirmation already went
            out before the admin send failed.
    """
    cause: Exception
    stage: str
    client_notified: bool = False


@dataclass(frozen=True)
class DispatchSucceeded:
    """Both emails were accepted by the provider."""
    timestamp: datetime


DispatchOutcome = Union[ValidationFailed, DispatchFailed, DispatchSucceeded]


class NotificationDispatcher:
    """
    Service for processing contact form submissions.

    Responsible for:
    - Extracting and validating the form fields
    - Rendering the client and admin emails
    - Sending the client confirmation, then the admin notification
    """

    def __init__(
        self,
        transport: Optional[ResendClient] = None,
        renderer: Optional[EmailRenderer] = None,
        catalog: Optional[ServiceCatalog] = None,
        mail_settings: Optional[MailSettings] = None,
    ) -> None:
        self._catalog = catalog if catalog is not None else default_catalog
        self._transport = transport or get_resend_client()
        self._renderer = renderer or EmailRenderer(catalog=self._catalog)
        self._mail = mail_settings or settings.mail

    @log_duration("handle_contact_submission")
    def handle_submission(self, raw_input: Any) -> DispatchOutcome:
        """
        Validate a submission and send both notification emails.

        The admin notification is only attempted once the client
        confirmation has been accepted.

        Args:
            raw_input: Decoded request body.

        Returns:
            ValidationFailed, DispatchFailed or DispatchSucceeded.
        """
        metrics = get_metrics()
        submission = ContactSubmission.from_payload(raw_input)

        errors = validate_contact_form(submission, self._catalog)
        if errors:
            logger.info(
                "Contact submission rejected",
                extra={"extra_fields": {"errors": errors}}
            )
            metrics.contact_submissions_total.inc(outcome="validation_failed")
            return ValidationFailed(errors=errors)

        received_at = now_utc()
        client_email = self._renderer.render_client_confirmation(
            submission.name,
            submission.email,
            submission.phone,
            submission.service,
            submission.message,
        )
        admin_email = self._renderer.render_admin_notification(
            submission.name,
            submission.email,
            submission.phone,
            submission.service,
            submission.message,
            received_at,
        )

        try:
            self._send(submission.email, client_email, STAGE_CLIENT)
        except InfrastructureError as e:
            metrics.contact_submissions_total.inc(outcome="failed")
            return DispatchFailed(cause=e, stage=STAGE_CLIENT)

        try:
            self._send(self._mail.admin_email, admin_email, STAGE_ADMIN)
        except InfrastructureError as e:
            logger.warning(
                "Client was notified but the admin notification failed",
                extra={"extra_fields": {"service": submission.service}}
            )
            metrics.contact_submissions_total.inc(outcome="failed")
            return DispatchFailed(cause=e, stage=STAGE_ADMIN, client_notified=True)

        metrics.contact_submissions_total.inc(outcome="succeeded")
        return DispatchSucceeded(timestamp=now_utc())

    def _send(self, recipient: str, email: RenderedEmail, stage: str) -> None:
        """Hand one rendered email to the transport and log the result."""
        metrics = get_metrics()
        try:
            if not recipient:
                raise ConfigurationError(
                    "ADMIN_EMAIL",
                    f"No recipient configured for the {stage} email",
                )
            result = self._transport.send(EmailMessage(
                sender=self._mail.sender,
                to=recipient,
                subject=email.subject,
                html=email.html,
            ))
        except InfrastructureError as e:
            metrics.emails_sent_total.inc(recipient=stage, status="failed")
            logger.error(
                f"Failed to send {stage} email: {e}",
                extra={"extra_fields": {
                    "stage": stage,
                    "error_type": type(e).__name__,
                    "details": e.details,
                }}
            )
            raise

        metrics.emails_sent_total.inc(recipient=stage, status="sent")
        logger.info(
            f"Email sent to {stage}",
            extra={"extra_fields": {
                "stage": stage,
                "message_id": getattr(result, "message_id", None),
            }}
        )
