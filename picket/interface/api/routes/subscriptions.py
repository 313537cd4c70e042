"""Push subscription routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from picket.application.usecase.subscription import (
    NotifyUseCase,
    SubscribeUseCase,
    UnsubscribeUseCase,
)
from picket.application.usecase.subscription.notify import NotifyRequest
from picket.application.usecase.subscription.subscribe import (
    SubscribeRequest,
    SubscribeResponse,
    UnsubscribeRequest,
)
from picket.domain.model import User
from picket.domain.service import FanOutResult
from picket.domain.value import PushKeys
from picket.interface.api.dependencies import admin_only, authenticated

router = APIRouter(
    prefix="/subscriptions", tags=["subscriptions"], route_class=DishkaRoute
)


class SubscriptionAPIRequest(BaseModel):
    """Browser PushSubscription JSON."""

    model_config = ConfigDict(populate_by_name=True)

    endpoint: str = Field(min_length=1)
    expiration_time: int | None = Field(default=None, alias="expirationTime")
    keys: PushKeys


class UnsubscribeAPIRequest(BaseModel):
    endpoint: str


class NotifyAPIRequest(BaseModel):
    """Notification to broadcast."""

    title: str = Field(min_length=1)
    body: str | None = None
    url: str | None = None
    user_ids: list[str] | None = None


@router.post(
    "", response_model=SubscribeResponse, status_code=status.HTTP_201_CREATED
)
async def subscribe(
    request: SubscriptionAPIRequest,
    subscribe_use_case: FromDishka[SubscribeUseCase],
    user: User = Depends(authenticated),
) -> SubscribeResponse:
    """Register the caller's push endpoint."""
    return await subscribe_use_case.execute(
        SubscribeRequest(
            user_id=str(user.id),
            endpoint=request.endpoint,
            expiration_time=request.expiration_time,
            keys=request.keys,
        )
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(
    request: UnsubscribeAPIRequest,
    unsubscribe_use_case: FromDishka[UnsubscribeUseCase],
    user: User = Depends(authenticated),
) -> None:
    """Remove one of the caller's push endpoints."""
    await unsubscribe_use_case.execute(
        UnsubscribeRequest(user_id=str(user.id), endpoint=request.endpoint)
    )


@router.post("/notify", response_model=FanOutResult)
async def notify(
    request: NotifyAPIRequest,
    notify_use_case: FromDishka[NotifyUseCase],
    admin: User = Depends(admin_only),
) -> FanOutResult:
    """Send a push notification to all or selected users."""
    return await notify_use_case.execute(
        NotifyRequest(admin_id=str(admin.id), **request.model_dump())
    )
