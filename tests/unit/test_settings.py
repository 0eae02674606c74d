"""
Tests for environment-driven settings.
"""

from contact_mailer.config import (
    DEFAULT_ALLOWED_ORIGINS,
    CorsSettings,
    ResendSettings,
    Settings,
)


class TestResendSettings:
    """Tests for ResendSettings."""
    
    def test_reads_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("RESEND_API_KEY", "re_live_key")
        
        resend = ResendSettings()
        
        assert resend.is_configured
        assert resend.emails_url == "https://api.resend.com/emails"
    
    def test_not_configured_without_key(self, monkeypatch):
        monkeypatch.delenv("RESEND_API_KEY", raising=False)
        
        assert not ResendSettings().is_configured
    
    def test_base_url_trailing_slash_is_stripped(self, monkeypatch):
        monkeypatch.setenv("RESEND_API_URL", "https://resend.internal/")
        
        assert ResendSettings().emails_url == "https://resend.internal/emails"


class TestCorsSettings:
    """Tests for CorsSettings."""
    
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CORS_ALLOWED_ORIGINS", raising=False)
        monkeypatch.delenv("FRONTEND_URL", raising=False)
        
        assert CorsSettings().origins == DEFAULT_ALLOWED_ORIGINS
    
    def test_origins_from_environment(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example,")
        monkeypatch.setenv("FRONTEND_URL", "https://front.example")
        
        cors = CorsSettings()
        
        assert cors.origins == (
            "https://a.example",
            "https://b.example",
            "https://front.example",
        )
    
    def test_frontend_url_not_duplicated(self):
        cors = CorsSettings(
            allowed_origins=("https://a.example",),
            frontend_url="https://a.example",
        )
        
        assert cors.origins == ("https://a.example",)
    
    def test_is_allowed(self):
        cors = CorsSettings(allowed_origins=("https://a.example",), frontend_url="")
        
        assert cors.is_allowed("https://a.example")
        assert cors.is_allowed(None)
        assert not cors.is_allowed("https://evil.example")


class TestSettings:
    """Tests for top-level Settings."""
    
    def test_defaults(self, monkeypatch):
        for name in ("API_PREFIX", "PORT", "LOG_LEVEL", "ADMIN_EMAIL", "EMAIL_FROM"):
            monkeypatch.delenv(name, raising=False)
        
        app_settings = Settings()
        
        assert app_settings.api_prefix == "/api"
        assert app_settings.port == 3000
        assert app_settings.log_level == "INFO"
        assert app_settings.mail.admin_email == ""
        assert app_settings.mail.sender == "Gonzaga Builders <onboarding@resend.dev>"
        assert app_settings.business.display_timezone == "America/New_York"
    
    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("API_PREFIX", "/v1/")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ADMIN_EMAIL", "office@gonzagabuilders.com")
        
        app_settings = Settings()
        
        assert app_settings.api_prefix == "/v1"
        assert app_settings.port == 8080
        assert app_settings.log_level == "DEBUG"
        assert app_settings.mail.admin_email == "office@gonzagabuilders.com"
