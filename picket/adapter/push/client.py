"""Web Push client.

Delivers notifications with VAPID authentication through ``pywebpush``.
"""

import asyncio
import json

import logfire
from pywebpush import WebPushException, webpush

from picket.adapter.error import StaleSubscriptionError, UpstreamError
from picket.config import PushSettings
from picket.domain.model import PushSubscription
from picket.domain.service.gateway import PushSender

# Push services answer these when a subscription no longer exists
GONE_STATUS_CODES = {404, 410}


class WebPushSender(PushSender):
    """PushSender backed by pywebpush."""

    def __init__(self, settings: PushSettings) -> None:
        """Initialize web push sender.

        Args:
            settings: VAPID keys and subject
        """
        self.settings = settings

    def _send_sync(self, subscription: PushSubscription, data: str) -> None:
        webpush(
            subscription_info=subscription.to_subscription_info(),
            data=data,
            vapid_private_key=self.settings.vapid_private_key,
            vapid_claims={"sub": self.settings.vapid_subject},
            ttl=self.settings.ttl_seconds,
        )

    async def send(self, subscription: PushSubscription, payload: dict) -> None:
        """Deliver a payload to one endpoint.

        Raises:
            StaleSubscriptionError: If the push service reports 404/410
            UpstreamError: For any other failure
        """
        data = json.dumps(payload)
        try:
            await asyncio.to_thread(self._send_sync, subscription, data)
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code in GONE_STATUS_CODES:
                raise StaleSubscriptionError(subscription.endpoint, status_code) from e
            logfire.error(
                "Push delivery failed",
                subscription_id=str(subscription.id),
                status_code=status_code,
                error=str(e),
            )
            raise UpstreamError(f"Push delivery failed: {e}") from e
        except OSError as e:
            raise UpstreamError(f"Push delivery failed: {e}") from e
        logfire.debug("Push delivered", subscription_id=str(subscription.id))


class MockPushSender(PushSender):
    """PushSender for tests.

    Records deliveries. Endpoints listed in ``dead_endpoints`` fail with
    ``StaleSubscriptionError``.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict]] = []
        self.dead_endpoints: set[str] = set()

    async def send(self, subscription: PushSubscription, payload: dict) -> None:
        if subscription.endpoint in self.dead_endpoints:
            raise StaleSubscriptionError(subscription.endpoint, 410)
        self.sent.append((subscription.endpoint, payload))
