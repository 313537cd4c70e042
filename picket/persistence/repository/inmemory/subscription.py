"""In-memory push subscription repository for testing."""

from picket.domain.model.subscription import PushSubscription
from picket.domain.repository.subscription import SubscriptionRepository
from picket.domain.value import SubscriptionId, UserId


class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory implementation of SubscriptionRepository for testing."""

    def __init__(self) -> None:
        self._subscriptions: dict[SubscriptionId, PushSubscription] = {}

    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        for existing in self._subscriptions.values():
            if existing.endpoint == subscription.endpoint:
                updated = existing.model_copy(
                    update={
                        "user_id": subscription.user_id,
                        "expiration_time": subscription.expiration_time,
                        "keys": subscription.keys,
                    }
                )
                self._subscriptions[existing.id] = updated
                return updated
        self._subscriptions[subscription.id] = subscription
        return subscription

    async def find_by_user(self, user_id: UserId) -> list[PushSubscription]:
        return [s for s in self._subscriptions.values() if s.user_id == user_id]

    async def find_all(
        self, user_ids: list[UserId] | None = None
    ) -> list[PushSubscription]:
        if user_ids is None:
            return list(self._subscriptions.values())
        wanted = set(user_ids)
        return [s for s in self._subscriptions.values() if s.user_id in wanted]

    async def delete(self, subscription_id: SubscriptionId) -> None:
        self._subscriptions.pop(subscription_id, None)

    async def delete_by_endpoint(self, user_id: UserId, endpoint: str) -> bool:
        for subscription in list(self._subscriptions.values()):
            if subscription.user_id == user_id and subscription.endpoint == endpoint:
                del self._subscriptions[subscription.id]
                return True
        return False

    async def delete_for_user(self, user_id: UserId) -> int:
        doomed = [s.id for s in self._subscriptions.values() if s.user_id == user_id]
        for subscription_id in doomed:
            del self._subscriptions[subscription_id]
        return len(doomed)
