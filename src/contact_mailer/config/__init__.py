"""Configuration package."""

from contact_mailer.config.settings import (
    DEFAULT_ALLOWED_ORIGINS,
    BusinessSettings,
    CorsSettings,
    MailSettings,
    ResendSettings,
    Settings,
    settings,
)

__all__ = [
    "DEFAULT_ALLOWED_ORIGINS",
    "BusinessSettings",
    "CorsSettings",
    "MailSettings",
    "ResendSettings",
    "Settings",
    "settings",
]
