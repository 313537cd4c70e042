"""Push notification fan-out."""

import asyncio

import logfire
from pydantic import BaseModel

from picket.adapter.error import UpstreamError
from picket.domain.model import PushSubscription
from picket.domain.repository import SubscriptionRepository
from picket.domain.value import UserId

from .base import Service
from .gateway import PushSender


class FanOutResult(BaseModel):
    """Outcome of one fan-out."""

    delivered: int
    removed: int


class NotificationService(Service):
    """Sends one payload to many push endpoints.

    An endpoint whose delivery fails is treated as stale and its
    subscription removed, so later fan-outs stop retrying it.
    """

    def __init__(
        self,
        subscription_repository: SubscriptionRepository,
        push_sender: PushSender,
    ) -> None:
        self.subscription_repository = subscription_repository
        self.push_sender = push_sender

    async def fan_out(
        self, payload: dict, user_ids: list[UserId] | None = None
    ) -> FanOutResult:
        """Send a payload to every subscription of the target users.

        Args:
            payload: JSON-serializable notification payload
            user_ids: Target users, None for everyone

        Returns:
            Count of delivered notifications and removed subscriptions
        """
        with logfire.span(
            "notification_service.fan_out",
            targeted=len(user_ids) if user_ids is not None else None,
        ):
            subscriptions = await self.subscription_repository.find_all(user_ids)
            outcomes = await asyncio.gather(
                *(self._deliver(s, payload) for s in subscriptions)
            )

            delivered = 0
            removed = 0
            for subscription, ok in zip(subscriptions, outcomes):
                if ok:
                    delivered += 1
                    continue
                await self.subscription_repository.delete(subscription.id)
                removed += 1

            logfire.info(
                "Fan-out finished",
                subscriptions=len(subscriptions),
                delivered=delivered,
                removed=removed,
            )
            return FanOutResult(delivered=delivered, removed=removed)

    async def _deliver(self, subscription: PushSubscription, payload: dict) -> bool:
        try:
            await self.push_sender.send(subscription, payload)
            return True
        except UpstreamError as e:
            logfire.warn(
                "Push delivery failed, dropping subscription",
                subscription_id=str(subscription.id),
                user_id=str(subscription.user_id),
                error=str(e),
            )
            return False
