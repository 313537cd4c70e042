"""PostgreSQL implementation of push subscription repository."""

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from picket.domain.model import PushSubscription
from picket.domain.repository import SubscriptionRepository
from picket.domain.value import SubscriptionId, UserId
from picket.persistence.mappers import row_to_subscription, subscription_to_dict
from picket.persistence.tables import push_subscriptions_table


class PostgresSubscriptionRepository(SubscriptionRepository):
    """PostgreSQL implementation of SubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def upsert(self, subscription: PushSubscription) -> PushSubscription:
        """Insert a subscription or re-bind its endpoint.

        Args:
            subscription: Subscription to store

        Returns:
            The stored row, which keeps its original ID on conflict
        """
        values = subscription_to_dict(subscription)
        stmt = insert(push_subscriptions_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[push_subscriptions_table.c.endpoint],
            set_={
                "user_id": stmt.excluded.user_id,
                "expiration_time": stmt.excluded.expiration_time,
                "p256dh": stmt.excluded.p256dh,
                "auth": stmt.excluded.auth,
            },
        ).returning(*push_subscriptions_table.c)
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        return row_to_subscription(dict(row))

    async def find_by_user(self, user_id: UserId) -> list[PushSubscription]:
        stmt = select(push_subscriptions_table).where(
            push_subscriptions_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return [row_to_subscription(dict(row)) for row in result.mappings()]

    async def find_all(
        self, user_ids: list[UserId] | None = None
    ) -> list[PushSubscription]:
        stmt = select(push_subscriptions_table)
        if user_ids is not None:
            stmt = stmt.where(push_subscriptions_table.c.user_id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_subscription(dict(row)) for row in result.mappings()]

    async def delete(self, subscription_id: SubscriptionId) -> None:
        stmt = delete(push_subscriptions_table).where(
            push_subscriptions_table.c.id == subscription_id
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_by_endpoint(self, user_id: UserId, endpoint: str) -> bool:
        stmt = delete(push_subscriptions_table).where(
            and_(
                push_subscriptions_table.c.user_id == user_id,
                push_subscriptions_table.c.endpoint == endpoint,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return bool(result.rowcount)

    async def delete_for_user(self, user_id: UserId) -> int:
        stmt = delete(push_subscriptions_table).where(
            push_subscriptions_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
