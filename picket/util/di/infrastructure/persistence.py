"""PostgreSQL-backed repositories and the request-scoped session."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from picket.config import Settings
from picket.domain.repository import (
    InvitationRepository,
    SubscriptionRepository,
    UnitOfWork,
    UserRepository,
)
from picket.persistence.database import create_engine, create_session_factory
from picket.persistence.repository import (
    PostgresInvitationRepository,
    PostgresSubscriptionRepository,
    PostgresUserRepository,
    SessionUnitOfWork,
)
from picket.util.di.base import ProviderBase
from picket.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Repositories over asyncpg, one session per request."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the app stops."""
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Yield the request session, committing on clean exit.

        dishka sends the exception that closed the scope back through
        ``yield``; in that case whatever was not committed yet through
        ``UnitOfWork`` is rolled back.
        """
        async with session_factory() as session:
            error = yield session
            if error is None:
                await session.commit()
                logfire.debug("Session committed")
            else:
                logfire.warn("Session rolled back", error_type=type(error).__name__)
                await session.rollback()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide unit of work bound to the request session."""
        return SessionUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_subscription_repository(
        self, session: AsyncSession
    ) -> SubscriptionRepository:
        """Provide push subscription repository."""
        return PostgresSubscriptionRepository(session)
