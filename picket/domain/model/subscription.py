"""Push subscription entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from picket.domain.model.common import DomainModel, utcnow
from picket.domain.value import PushKeys, SubscriptionId, UserId


class PushSubscription(DomainModel):
    """A browser push endpoint registered by a user.

    Endpoints are unique; a user may own several (one per device).
    """

    id: SubscriptionId
    user_id: UserId
    endpoint: str
    expiration_time: Optional[int] = None
    keys: PushKeys
    created_at: datetime = Field(default_factory=utcnow)

    def to_subscription_info(self) -> dict:
        """Subscription in the browser PushSubscription JSON shape."""
        return {
            "endpoint": self.endpoint,
            "expirationTime": self.expiration_time,
            "keys": {"p256dh": self.keys.p256dh, "auth": self.keys.auth},
        }
