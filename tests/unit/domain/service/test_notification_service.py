"""Unit tests for NotificationService fan-out."""

from uuid import uuid4

import pytest

from picket.domain.model import PushSubscription
from picket.domain.repository import SubscriptionRepository
from picket.domain.service import NotificationService, PushSender
from picket.domain.value import PushKeys, SubscriptionId, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def subscribe(unit_env, user_id: UserId, endpoint: str) -> PushSubscription:
    repo = await unit_env.get(SubscriptionRepository)
    return await repo.upsert(
        PushSubscription(
            id=SubscriptionId(uuid4()),
            user_id=user_id,
            endpoint=endpoint,
            keys=PushKeys(p256dh="key", auth="auth"),
        )
    )


class TestFanOut:
    @pytest.mark.asyncio
    async def test_delivers_to_every_subscription(self, unit_env):
        service = await unit_env.get(NotificationService)
        sender = await unit_env.get(PushSender)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        await subscribe(unit_env, alice, "https://push/a")
        await subscribe(unit_env, bob, "https://push/b")

        result = await service.fan_out({"title": "Picket at noon"})

        assert result.delivered == 2
        assert result.removed == 0
        assert {endpoint for endpoint, _ in sender.sent} == {
            "https://push/a",
            "https://push/b",
        }

    @pytest.mark.asyncio
    async def test_targets_selected_users(self, unit_env):
        service = await unit_env.get(NotificationService)
        sender = await unit_env.get(PushSender)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        await subscribe(unit_env, alice, "https://push/a")
        await subscribe(unit_env, bob, "https://push/b")

        result = await service.fan_out({"title": "Only Alice"}, user_ids=[alice])

        assert result.delivered == 1
        assert sender.sent == [("https://push/a", {"title": "Only Alice"})]

    @pytest.mark.asyncio
    async def test_dead_endpoint_is_removed(self, unit_env):
        service = await unit_env.get(NotificationService)
        sender = await unit_env.get(PushSender)
        repo = await unit_env.get(SubscriptionRepository)
        alice = UserId(uuid4())
        await subscribe(unit_env, alice, "https://push/live")
        await subscribe(unit_env, alice, "https://push/dead")
        sender.dead_endpoints.add("https://push/dead")

        result = await service.fan_out({"title": "Hello"})

        assert result.delivered == 1
        assert result.removed == 1
        remaining = await repo.find_by_user(alice)
        assert [s.endpoint for s in remaining] == ["https://push/live"]

        # The next fan-out no longer tries the dead endpoint
        second = await service.fan_out({"title": "Again"})
        assert second.delivered == 1
        assert second.removed == 0
