"""Push subscription repository interface."""

from abc import ABC, abstractmethod

from picket.domain.model.subscription import PushSubscription
from picket.domain.value import SubscriptionId, UserId


class SubscriptionRepository(ABC):
    """Repository for push subscriptions."""

    @abstractmethod
    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert a subscription, or re-bind an existing endpoint.

        Endpoints are unique. Registering a known endpoint moves it to the
        given user and refreshes its keys.

        Returns:
            The stored subscription
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[PushSubscription]:
        """List the subscriptions of one user."""
        pass

    @abstractmethod
    async def find_all(
        self, user_ids: list[UserId] | None = None
    ) -> list[PushSubscription]:
        """List subscriptions, optionally restricted to some users."""
        pass

    @abstractmethod
    async def delete(self, subscription_id: SubscriptionId) -> None:
        """Delete one subscription."""
        pass

    @abstractmethod
    async def delete_by_endpoint(self, user_id: UserId, endpoint: str) -> bool:
        """Delete a user's subscription by endpoint.

        Returns:
            True if a subscription was removed
        """
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: UserId) -> int:
        """Delete every subscription of a user.

        Returns:
            Number of subscriptions removed
        """
        pass
