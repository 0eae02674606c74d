"""
Email Renderer.

Turns validated contact fields into the client confirmation and the
admin notification. Rendering is pure: the same inputs always produce
the same subject and HTML.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape
from markupsafe import Markup, escape

from contact_mailer.config import BusinessSettings, settings
from contact_mailer.core.catalog import ServiceCatalog, default_catalog
from contact_mailer.core.timestamps import format_received_at


CLIENT_TEMPLATE = "client_confirmation.html"
ADMIN_TEMPLATE = "admin_notification.html"

_HEADER_UNSAFE = re.compile(r"[\x00-\x1f\x7f]+")
_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class RenderedEmail:
    """Subject line and HTML body of one email."""
    subject: str
    html: str


def nl2br(value: Optional[str]) -> Markup:
    """Escape text and turn its line breaks into <br> tags."""
    if not value:
        return Markup("")
    lines = str(value).replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return Markup("<br>\n").join(escape(line) for line in lines)


def sanitize_header(value: Optional[str]) -> str:
    """
    Make user text safe for an email header.

    Control characters (CR and LF included) are replaced by spaces and
    whitespace runs collapse to one space.
    """
    if not value:
        return ""
    cleaned = _HEADER_UNSAFE.sub(" ", value)
    return _WHITESPACE_RUN.sub(" ", cleaned).strip()


def build_environment() -> Environment:
    """Create the Jinja environment for the packaged email templates."""
    env = Environment(
        loader=PackageLoader("contact_mailer", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=True),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["nl2br"] = nl2br
    return env


class EmailRenderer:
    """Renders contact emails from packaged Jinja templates."""

    def __init__(
        self,
        business: Optional[BusinessSettings] = None,
        catalog: Optional[ServiceCatalog] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        self._business = business or settings.business
        self._catalog = catalog if catalog is not None else default_catalog
        self._env = environment or build_environment()

    @property
    def client_subject(self) -> str:
        return f"We Received Your Inquiry - {self._business.name}"

    def service_label(self, service_code: Optional[str]) -> str:
        """Catalog label, falling back to the raw code for unknown services."""
        return self._catalog.label_for(service_code) or (service_code or "")

    def render_client_confirmation(
        self,
        name: str,
        email: str,
        phone: Optional[str],
        service_code: str,
        message: str,
    ) -> RenderedEmail:
        """
        Render the confirmation sent to the person who filled the form.

        The phone line is left out entirely when no phone was given.
        """
        html = self._env.get_template(CLIENT_TEMPLATE).render(
            business=self._business,
            name=name,
            email=email,
            phone=_blank_to_none(phone),
            service_label=self.service_label(service_code),
            message=message,
        )
        return RenderedEmail(subject=self.client_subject, html=html)

    def render_admin_notification(
        self,
        name: str,
        email: str,
        phone: Optional[str],
        service_code: str,
        message: str,
        received_at: datetime,
    ) -> RenderedEmail:
        """
        Render the notification sent to the administrator.

        Args:
            received_at: When the submission was captured, shown in the
                configured display timezone.
        """
        html = self._env.get_template(ADMIN_TEMPLATE).render(
            business=self._business,
            name=name,
            email=email,
            phone=_blank_to_none(phone),
            service_label=self.service_label(service_code),
            message=message,
            received_at=format_received_at(received_at, self._business.display_timezone),
        )
        return RenderedEmail(
            subject=f"New Contact from {sanitize_header(name)}",
            html=html,
        )


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value
