"""Push subscription use cases."""

from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel, ConfigDict, Field

from picket.domain.error import NotFoundError
from picket.domain.model import PushSubscription
from picket.domain.repository import SubscriptionRepository
from picket.domain.value import PushKeys, SubscriptionId, UserId


class SubscribeRequest(BaseModel):
    """Browser PushSubscription JSON, plus the owner."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str  # From authenticated user
    endpoint: str = Field(min_length=1)
    expiration_time: int | None = Field(default=None, alias="expirationTime")
    keys: PushKeys


class SubscribeResponse(BaseModel):
    subscription_id: str
    endpoint: str


class SubscribeUseCase:
    """Use case for registering a push endpoint.

    Registering an endpoint that is already known re-binds it to the caller,
    so repeating the call is harmless.
    """

    def __init__(self, subscription_repository: SubscriptionRepository) -> None:
        self.subscription_repository = subscription_repository

    async def execute(self, request: SubscribeRequest) -> SubscribeResponse:
        with logfire.span("subscribe.execute", user_id=request.user_id):
            subscription = await self.subscription_repository.upsert(
                PushSubscription(
                    id=SubscriptionId(uuid4()),
                    user_id=UserId(UUID(request.user_id)),
                    endpoint=request.endpoint,
                    expiration_time=request.expiration_time,
                    keys=request.keys,
                )
            )
            logfire.info(
                "Push subscription stored",
                user_id=request.user_id,
                subscription_id=str(subscription.id),
            )
            return SubscribeResponse(
                subscription_id=str(subscription.id), endpoint=subscription.endpoint
            )


class UnsubscribeRequest(BaseModel):
    user_id: str  # From authenticated user
    endpoint: str


class UnsubscribeUseCase:
    """Use case for removing one of the caller's push endpoints."""

    def __init__(self, subscription_repository: SubscriptionRepository) -> None:
        self.subscription_repository = subscription_repository

    async def execute(self, request: UnsubscribeRequest) -> None:
        """Remove a subscription.

        Raises:
            NotFoundError: If the caller has no subscription for the endpoint
        """
        removed = await self.subscription_repository.delete_by_endpoint(
            UserId(UUID(request.user_id)), request.endpoint
        )
        if not removed:
            raise NotFoundError("Subscription", request.endpoint)
        logfire.info("Push subscription removed", user_id=request.user_id)
