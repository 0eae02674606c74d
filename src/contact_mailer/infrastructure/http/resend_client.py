"""
Resend API Client.

Sends transactional emails through the Resend REST API.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from contact_mailer.config import ResendSettings, settings
from contact_mailer.core.exceptions import (
    ConfigurationError,
    EmailRejectedError,
    EmailTransportError,
)
from contact_mailer.infrastructure.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    get_circuit_breaker,
)
from contact_mailer.infrastructure.logging import get_logger, log_duration
from contact_mailer.infrastructure.metrics import get_metrics


logger = get_logger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    """A single outgoing email."""
    sender: str
    to: str
    subject: str
    html: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API request payload."""
        return {
            "from": self.sender,
            "to": [self.to],
            "subject": self.subject,
            "html": self.html,
        }


@dataclass(frozen=True)
class SendResult:
    """Response from the Resend API."""
    message_id: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Any) -> "SendResult":
        """Tolerates bodies that are not a JSON object."""
        if not isinstance(data, dict):
            return cls()
        return cls(message_id=data.get("id"))


class ResendClient:
    """
    Client for the Resend email API.

    Connection failures are retried at the socket level only; a request
    that reached the provider is never re-sent, so an email cannot go
    out twice.
    """

    def __init__(
        self,
        resend_settings: Optional[ResendSettings] = None,
        circuit: Optional[CircuitBreaker] = None,
    ) -> None:
        """
        Initialize Resend client.

        Args:
            resend_settings: API key, base URL and timeout.
            circuit: Circuit breaker guarding provider calls.
        """
        self._settings = resend_settings or settings.resend
        self._circuit = circuit or get_circuit_breaker(
            "resend",
            CircuitBreakerConfig(
                failure_threshold=5,
                timeout_seconds=30.0,
                excluded_exceptions=(ConfigurationError, EmailRejectedError),
            ),
        )
        self._session: Optional[requests.Session] = None

    @property
    def is_configured(self) -> bool:
        return self._settings.is_configured

    @property
    def session(self) -> requests.Session:
        """Get or create HTTP session with connection retry."""
        if self._session is None:
            self._session = requests.Session()

            retry_strategy = Retry(
                total=2,
                connect=2,
                read=0,
                status=0,
                backoff_factor=0.5,
                allowed_methods=["POST"],
            )

            adapter = HTTPAdapter(
                max_retries=retry_strategy,
                pool_connections=5,
                pool_maxsize=10,
            )

            self._session.mount("https://", adapter)
            self._session.mount("http://", adapter)

            self._session.headers.update({
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Authorization": f"Bearer {self._settings.api_key}",
            })

        return self._session

    @log_duration("resend_send_email")
    def send(self, message: EmailMessage) -> SendResult:
        """
        Send an email.

        Args:
            message: The email to send.

        Returns:
            SendResult with the provider's message id.

        Raises:
            ConfigurationError: If no API key is configured.
            EmailTransportError: If the provider call fails.
            CircuitBreakerOpenError: If recent calls kept failing.
        """
        if not self.is_configured:
            raise ConfigurationError(
                "RESEND_API_KEY",
                "Resend API key is not configured",
            )
        return self._circuit.call(self._do_send, message)

    def _do_send(self, message: EmailMessage) -> SendResult:
        metrics = get_metrics()

        logger.info("Sending email through Resend")

        try:
            response = self.session.post(
                self._settings.emails_url,
                json=message.to_dict(),
                timeout=self._settings.timeout_seconds,
            )
            response.raise_for_status()

        except requests.exceptions.Timeout as e:
            metrics.external_requests_total.inc(service="resend", status="timeout")
            logger.error(
                "Resend timeout",
                extra={"extra_fields": {
                    "timeout": self._settings.timeout_seconds,
                }}
            )
            raise EmailTransportError(f"Resend timeout: {e}") from e

        except requests.exceptions.HTTPError as e:
            metrics.external_requests_total.inc(service="resend", status="http_error")
            status_code = e.response.status_code
            body = e.response.text[:500] if e.response.text else None
            logger.error(
                f"Resend HTTP error: {status_code}",
                extra={"extra_fields": {
                    "status_code": status_code,
                    "response_body": body,
                }}
            )
            error_class = EmailTransportError
            if 400 <= status_code < 500 and status_code != 429:
                error_class = EmailRejectedError
            raise error_class(
                f"Resend rejected the email ({status_code}): {body}",
                status_code=status_code,
            ) from e

        except requests.exceptions.RequestException as e:
            metrics.external_requests_total.inc(service="resend", status="error")
            logger.error(
                f"Resend request failed: {e}",
                extra={"extra_fields": {
                    "error_type": type(e).__name__,
                }}
            )
            raise EmailTransportError(f"Resend request failed: {e}") from e

        try:
            result = SendResult.from_api_response(response.json())
        except ValueError:
            result = SendResult()

        metrics.external_requests_total.inc(service="resend", status="success")
        logger.info(
            "Email accepted by Resend",
            extra={"extra_fields": {
                "message_id": result.message_id,
            }}
        )
        return result

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "ResendClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# Global client instance
_resend_client: Optional[ResendClient] = None


def get_resend_client() -> ResendClient:
    """Get global Resend client instance."""
    global _resend_client
    if _resend_client is None:
        _resend_client = ResendClient()
    return _resend_client
