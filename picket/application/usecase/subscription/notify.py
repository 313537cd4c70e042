"""Notify use case."""

from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from picket.domain.error import FieldViolation, ValidationError
from picket.domain.service import FanOutResult, NotificationService
from picket.domain.value import UserId


class NotifyRequest(BaseModel):
    """Notification to fan out."""

    admin_id: str  # From authenticated admin
    title: str = Field(min_length=1)
    body: str | None = None
    url: str | None = None
    user_ids: list[str] | None = None  # None targets everyone


class NotifyUseCase:
    """Use case for sending a push notification to many users.

    Delivery is the requested action here, so the result reports how many
    endpoints were reached and how many stale ones were dropped.
    """

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: NotifyRequest) -> FanOutResult:
        user_ids = None
        if request.user_ids is not None:
            try:
                user_ids = [UserId(UUID(u)) for u in request.user_ids]
            except ValueError:
                raise ValidationError(
                    [FieldViolation(field="user_ids", message="Invalid user ID")]
                ) from None

        payload: dict[str, Any] = {"title": request.title}
        if request.body is not None:
            payload["body"] = request.body
        if request.url is not None:
            payload["url"] = request.url

        with logfire.span("notify.execute", admin_id=request.admin_id):
            return await self.notification_service.fan_out(payload, user_ids)
