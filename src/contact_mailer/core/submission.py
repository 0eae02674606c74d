"""
Contact Submission Model.

Uses Pydantic to extract the contact form fields from an untrusted
request payload. Extraction never fails: values of the wrong type are
treated as absent so that the form rules report them.
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ContactSubmission(BaseModel):
    """Fields received from the contact form."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None

    @field_validator("name", "email", "phone", "service", "message", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Optional[str]:
        """Keep strings as-is and treat anything else as absent."""
        if isinstance(v, str):
            return v
        return None

    @classmethod
    def from_payload(cls, payload: Any) -> "ContactSubmission":
        """
        Build a submission from a decoded request body.

        Args:
            payload: Decoded JSON or form data. Anything that is not a
                mapping yields an empty submission.

        Returns:
            ContactSubmission instance.
        """
        if not isinstance(payload, Mapping):
            return cls()

        fields: Dict[str, Any] = {
            key: payload.get(key)
            for key in ("name", "email", "phone", "service", "message")
        }
        return cls.model_validate(fields)

    @property
    def has_phone(self) -> bool:
        """Whether a non-blank phone number was provided."""
        return bool(self.phone and self.phone.strip())
