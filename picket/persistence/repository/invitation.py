"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from picket.domain.model import Invitation
from picket.domain.repository import InvitationRepository
from picket.domain.value import InvitationId, InvitationStatus, InvitationToken, UserId
from picket.persistence.mappers import invitation_to_dict, row_to_invitation
from picket.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, invitation: Invitation) -> Invitation:
        stmt = insert(invitations_table).values(**invitation_to_dict(invitation))
        await self.session.execute(stmt)
        await self.session.flush()
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID.

        Args:
            invitation_id: Invitation ID to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token.

        Args:
            token: Invitation token to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def consume(
        self, token: InvitationToken, now: datetime
    ) -> Optional[Invitation]:
        """Consume a pending invitation with a single conditional update.

        The row lock taken by the UPDATE serializes concurrent redemptions;
        the loser re-evaluates the WHERE clause and matches nothing.
        """
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.token == token.root,
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                    invitations_table.c.expires_at > now,
                )
            )
            .values(status=InvitationStatus.CONSUMED.value, consumed_at=now)
            .returning(*invitations_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def mark_consumed_by(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> None:
        stmt = (
            update(invitations_table)
            .where(invitations_table.c.id == invitation_id)
            .values(consumed_by=user_id)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def release(self, invitation_id: InvitationId) -> None:
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == InvitationStatus.CONSUMED.value,
                )
            )
            .values(
                status=InvitationStatus.PENDING.value,
                consumed_at=None,
                consumed_by=None,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def purge_expired(self, now: datetime) -> int:
        """Delete expired invitations that were never redeemed.

        Args:
            now: Current time

        Returns:
            Number of rows deleted
        """
        stmt = delete(invitations_table).where(
            and_(
                invitations_table.c.status == InvitationStatus.PENDING.value,
                invitations_table.c.expires_at <= now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
