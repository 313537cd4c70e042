"""Web push infrastructure providers."""

from dishka import Scope, provide

from picket.adapter.push import WebPushSender
from picket.config import Settings
from picket.domain.service import PushSender
from picket.util.di.base import ProviderBase


class PushProvider(ProviderBase):
    """Push component base."""

    __mock_component__ = "push"


class ProdPushProvider(PushProvider):
    """Production push provider using VAPID web push."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_push_sender(self, settings: Settings) -> PushSender:
        """Provide web push sender."""
        return WebPushSender(settings.push)
