"""
Application configuration.

Centralizes environment variables, constants, and settings
using dataclasses for type safety and immutability.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


DEFAULT_ALLOWED_ORIGINS: Tuple[str, ...] = (
    "https://gonzagabuilders.com",
    "https://www.gonzagabuilders.com",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Read a comma-separated environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class ResendSettings:
    """Resend API settings."""

    api_key: str = field(
        default_factory=lambda: os.environ.get("RESEND_API_KEY", "")
    )
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "RESEND_API_URL", "https://api.resend.com"
        ).rstrip("/")
    )
    timeout_seconds: int = 10

    @property
    def is_configured(self) -> bool:
        """Check if Resend is properly configured."""
        return bool(self.api_key)

    @property
    def emails_url(self) -> str:
        """Get the send-email endpoint URL."""
        return f"{self.base_url}/emails"


@dataclass(frozen=True)
class MailSettings:
    """Sender identity and internal recipients."""

    sender: str = field(
        default_factory=lambda: os.environ.get(
            "EMAIL_FROM", "Gonzaga Builders <onboarding@resend.dev>"
        )
    )
    admin_email: str = field(
        default_factory=lambda: os.environ.get("ADMIN_EMAIL", "")
    )


@dataclass(frozen=True)
class BusinessSettings:
    """Fixed business details shown in outgoing emails."""

    name: str = field(
        default_factory=lambda: os.environ.get(
            "BUSINESS_NAME", "Gonzaga Professional Builders Inc"
        )
    )
    tagline: str = "Quality Remodeling & Construction in Long Island, NY"
    phone_display: str = "631-339-1584"
    phone_dial: str = "+16313391584"
    contact_email: str = field(
        default_factory=lambda: os.environ.get(
            "BUSINESS_EMAIL", "info@gonzagabuilders.com"
        )
    )
    address: str = "3006 Watch Hill Ave, Medford, NY 11763"
    hours: str = "Mon-Fri 8:00 AM - 6:00 PM | Sat 8:00 AM - 3:00 PM"
    website_url: str = field(
        default_factory=lambda: os.environ.get(
            "BUSINESS_WEBSITE", "https://gonzagabuilders.com"
        )
    )
    logo_url: str = (
        "https://res.cloudinary.com/dogoadody/image/upload/"
        "v1768520845/logo_cliente_trans_sm_ojkywa.png"
    )
    facebook_url: str = "https://www.facebook.com/GonzagaProfessionalBuilders/"
    instagram_url: str = "https://www.instagram.com/gonzagaprofessionalbuilders"
    tiktok_url: str = "https://www.tiktok.com/@gonzagaprobuilders"
    service_area: str = "Serving Long Island, Suffolk County, and Nassau County, NY"
    copyright_year: int = 2024
    response_time: str = "24 hours"
    display_timezone: str = field(
        default_factory=lambda: os.environ.get("DISPLAY_TIMEZONE", "America/New_York")
    )


@dataclass(frozen=True)
class CorsSettings:
    """Cross-origin allow-list."""

    allowed_origins: Tuple[str, ...] = field(
        default_factory=lambda: _env_list("CORS_ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
    )
    frontend_url: str = field(
        default_factory=lambda: os.environ.get("FRONTEND_URL", "")
    )

    @property
    def origins(self) -> Tuple[str, ...]:
        """All accepted origins, including the frontend URL if set."""
        if self.frontend_url and self.frontend_url not in self.allowed_origins:
            return self.allowed_origins + (self.frontend_url,)
        return self.allowed_origins

    def is_allowed(self, origin: Optional[str]) -> bool:
        """Requests without an Origin header are always allowed."""
        if not origin:
            return True
        return origin in self.origins


@dataclass(frozen=True)
class Settings:
    """Main application settings."""

    resend: ResendSettings = field(default_factory=ResendSettings)
    mail: MailSettings = field(default_factory=MailSettings)
    business: BusinessSettings = field(default_factory=BusinessSettings)
    cors: CorsSettings = field(default_factory=CorsSettings)
    service_name: str = field(
        default_factory=lambda: os.environ.get(
            "SERVICE_NAME", "Gonzaga Professional Builders API"
        )
    )
    api_prefix: str = field(
        default_factory=lambda: os.environ.get("API_PREFIX", "/api").rstrip("/")
    )
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", 3000)))
    environment: str = field(
        default_factory=lambda: os.environ.get("ENVIRONMENT", "development")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Singleton settings instance
settings = Settings()
