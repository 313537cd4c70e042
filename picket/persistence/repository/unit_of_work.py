"""SQLAlchemy session-backed unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from picket.domain.repository import UnitOfWork


class SessionUnitOfWork(UnitOfWork):
    """Commits the request's database session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()
