"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

from typing import Any, Dict, Generator
from unittest.mock import MagicMock

import pytest
from flask import Flask
from flask.testing import FlaskClient

from contact_mailer.app import create_app
from contact_mailer.config import (
    BusinessSettings,
    CorsSettings,
    MailSettings,
    ResendSettings,
    Settings,
)
from contact_mailer.infrastructure import metrics as metrics_module
from contact_mailer.infrastructure.circuit_breaker import reset_circuit_breakers
from contact_mailer.infrastructure.http import SendResult
from contact_mailer.services import EmailRenderer, NotificationDispatcher


ADMIN_EMAIL = "admin@gonzagabuilders.com"
SENDER = "Gonzaga Builders <noreply@gonzagabuilders.com>"


@pytest.fixture(autouse=True)
def fresh_metrics(monkeypatch) -> Generator[None, None, None]:
    """Give each test an empty metrics registry and closed circuits."""
    monkeypatch.setattr(metrics_module, "_metrics", None)
    reset_circuit_breakers()
    yield


@pytest.fixture
def business() -> BusinessSettings:
    return BusinessSettings(
        name="Gonzaga Professional Builders Inc",
        display_timezone="America/New_York",
    )


@pytest.fixture
def mail_settings() -> MailSettings:
    return MailSettings(sender=SENDER, admin_email=ADMIN_EMAIL)


@pytest.fixture
def app_settings(business, mail_settings) -> Settings:
    return Settings(
        resend=ResendSettings(api_key="re_test_key", base_url="https://api.resend.test"),
        mail=mail_settings,
        business=business,
        cors=CorsSettings(
            allowed_origins=("https://gonzagabuilders.com", "http://localhost:3000"),
            frontend_url="https://preview.gonzagabuilders.com",
        ),
        service_name="Gonzaga Professional Builders API",
        api_prefix="/api",
    )


@pytest.fixture
def mock_transport() -> MagicMock:
    """Email transport that accepts every message."""
    transport = MagicMock()
    transport.send.return_value = SendResult(message_id="email-123")
    return transport


@pytest.fixture
def renderer(business) -> EmailRenderer:
    return EmailRenderer(business=business)


@pytest.fixture
def dispatcher(mock_transport, renderer, mail_settings) -> NotificationDispatcher:
    return NotificationDispatcher(
        transport=mock_transport,
        renderer=renderer,
        mail_settings=mail_settings,
    )


@pytest.fixture
def app(app_settings, dispatcher) -> Flask:
    """Create test Flask application."""
    test_config = {
        "TESTING": True,
    }
    return create_app(test_config, dispatcher=dispatcher, app_settings=app_settings)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def jane_payload() -> Dict[str, Any]:
    """A valid submission without a phone number."""
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "",
        "service": "kitchen",
        "message": "I would like a quote for a kitchen remodel.",
    }


@pytest.fixture
def invalid_payload() -> Dict[str, Any]:
    """A submission breaking all four rules."""
    return {
        "name": "J",
        "email": "bad",
        "service": "x",
        "message": "short",
    }
