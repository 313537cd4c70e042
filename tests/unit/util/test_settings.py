"""Unit tests for settings loading and checks."""

import pytest

from picket.config import Settings
from picket.util.di.core import check_settings
from picket.util.error import ConfigurationError


class TestSettings:
    def test_nested_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("INVITATIONS__TTL_DAYS", "7")
        monkeypatch.setenv("MAIL__HOST", "smtp.example.org")

        settings = Settings()

        assert settings.invitations.ttl_days == 7
        assert settings.mail.host == "smtp.example.org"

    def test_production_urls_use_https(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("HOST", "api.picketer.app")
        monkeypatch.setenv("FRONTEND_HOST", "picketer.app")

        settings = Settings()

        assert settings.api.base_url == "https://api.picketer.app"
        assert settings.api.frontend_url == "https://picketer.app"


class TestCheckSettings:
    def test_default_secret_rejected_in_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.delenv("AUTH__JWT_SECRET", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            check_settings(Settings(_env_file=None))

        assert exc_info.value.setting == "AUTH__JWT_SECRET"

    def test_custom_secret_accepted_in_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("AUTH__JWT_SECRET", "a-real-secret")

        assert check_settings(Settings()).auth.jwt_secret == "a-real-secret"

    def test_default_secret_allowed_in_development(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.delenv("AUTH__JWT_SECRET", raising=False)

        check_settings(Settings(_env_file=None))
