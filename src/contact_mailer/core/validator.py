"""
Contact form validation.

Checks a submission against the form rules and collects every
violation in rule order: name, email, message, service.
"""

import re
from typing import Any, List, Optional

from contact_mailer.core.catalog import ServiceCatalog, default_catalog
from contact_mailer.core.submission import ContactSubmission


# Shape check only: something@something.something without whitespace.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MIN_NAME_LENGTH = 2
MIN_MESSAGE_LENGTH = 10

NAME_ERROR = "Name must be at least 2 characters"
EMAIL_ERROR = "Invalid email address"
MESSAGE_ERROR = "Message must be at least 10 characters"
SERVICE_ERROR = "Invalid service selected"


def _trimmed_length(value: Any) -> int:
    if not isinstance(value, str):
        return 0
    return len(value.strip())


def is_valid_email(value: Any) -> bool:
    """Check that a value has the local@domain.tld shape."""
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def validate_contact_form(
    submission: ContactSubmission,
    catalog: Optional[ServiceCatalog] = None,
) -> List[str]:
    """
    Validate a contact submission.

    Args:
        submission: Extracted form fields.
        catalog: Service catalog used to check the service code.

    Returns:
        List of error messages. Empty when the submission is valid.
    """
    if catalog is None:
        catalog = default_catalog
    errors: List[str] = []

    if _trimmed_length(submission.name) < MIN_NAME_LENGTH:
        errors.append(NAME_ERROR)

    if not is_valid_email(submission.email):
        errors.append(EMAIL_ERROR)

    if _trimmed_length(submission.message) < MIN_MESSAGE_LENGTH:
        errors.append(MESSAGE_ERROR)

    if not catalog.is_valid_code(submission.service):
        errors.append(SERVICE_ERROR)

    return errors
