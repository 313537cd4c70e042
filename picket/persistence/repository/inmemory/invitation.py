"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from picket.domain.model.invitation import Invitation
from picket.domain.repository.invitation import InvitationRepository
from picket.domain.value import InvitationId, InvitationStatus, InvitationToken, UserId


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def save(self, invitation: Invitation) -> Invitation:
        self._invitations[invitation.id] = invitation
        return invitation

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def consume(
        self, token: InvitationToken, now: datetime
    ) -> Optional[Invitation]:
        """Check and mark in one step, with no await in between."""
        for invitation in self._invitations.values():
            if invitation.token == token and invitation.is_redeemable(now):
                consumed = invitation.model_copy(
                    update={"status": InvitationStatus.CONSUMED, "consumed_at": now}
                )
                self._invitations[invitation.id] = consumed
                return consumed
        return None

    async def mark_consumed_by(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> None:
        invitation = self._invitations.get(invitation_id)
        if invitation:
            self._invitations[invitation_id] = invitation.model_copy(
                update={"consumed_by": user_id}
            )

    async def release(self, invitation_id: InvitationId) -> None:
        invitation = self._invitations.get(invitation_id)
        if invitation and invitation.status == InvitationStatus.CONSUMED:
            self._invitations[invitation_id] = invitation.model_copy(
                update={
                    "status": InvitationStatus.PENDING,
                    "consumed_at": None,
                    "consumed_by": None,
                }
            )

    async def purge_expired(self, now: datetime) -> int:
        expired = [
            i.id
            for i in self._invitations.values()
            if i.status == InvitationStatus.PENDING and i.is_expired(now)
        ]
        for invitation_id in expired:
            del self._invitations[invitation_id]
        return len(expired)
