"""Core package - Contact form rules, catalog and shared exceptions."""

from contact_mailer.core.catalog import (
    DEFAULT_SERVICES,
    ServiceCatalog,
    default_catalog,
)
from contact_mailer.core.exceptions import (
    ConfigurationError,
    ContactMailerError,
    EmailRejectedError,
    EmailTransportError,
    ExternalServiceError,
    InfrastructureError,
)
from contact_mailer.core.submission import ContactSubmission
from contact_mailer.core.timestamps import (
    format_received_at,
    now_utc,
    to_iso8601,
)
from contact_mailer.core.validator import (
    is_valid_email,
    validate_contact_form,
)

__all__ = [
    # Catalog
    "DEFAULT_SERVICES",
    "ServiceCatalog",
    "default_catalog",
    # Submission
    "ContactSubmission",
    "validate_contact_form",
    "is_valid_email",
    # Timestamps
    "format_received_at",
    "now_utc",
    "to_iso8601",
    # Exceptions
    "ConfigurationError",
    "ContactMailerError",
    "EmailRejectedError",
    "EmailTransportError",
    "ExternalServiceError",
    "InfrastructureError",
]
