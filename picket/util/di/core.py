"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from picket.config import DEFAULT_JWT_SECRET, AuthSettings, Settings
from picket.util.di.base import ProviderBase
from picket.util.error import ConfigurationError
from picket.util.tasks import BackgroundDispatcher


def check_settings(settings: Settings) -> Settings:
    """Reject settings that must never reach a deployed environment.

    Raises:
        ConfigurationError: If the session secret is still the default
    """
    if settings.environment in ("staging", "production"):
        if settings.auth.jwt_secret == DEFAULT_JWT_SECRET:
            raise ConfigurationError(
                "AUTH__JWT_SECRET", f"must be set in {settings.environment}"
            )
    return settings


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return check_settings(Settings())

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_dispatcher(self) -> BackgroundDispatcher:
        """Provide the process-wide background task dispatcher."""
        return BackgroundDispatcher()
