"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from picket.domain.model.invitation import Invitation
from picket.domain.value import InvitationId, InvitationToken, UserId


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Consumption is the one correctness-critical operation: implementations
    must make ``consume`` atomic so that two concurrent redemptions of the
    same token cannot both succeed.
    """

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The saved invitation
        """
        pass

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID."""
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token, whatever its status.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def consume(
        self, token: InvitationToken, now: datetime
    ) -> Invitation | None:
        """Atomically mark a pending, unexpired invitation as consumed.

        Args:
            token: The invitation token
            now: Current time, used for the expiry check and ``consumed_at``

        Returns:
            The consumed invitation, or None if no redeemable invitation
            matched (unknown, expired, or already consumed)
        """
        pass

    @abstractmethod
    async def mark_consumed_by(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> None:
        """Record which credential a consumed invitation produced."""
        pass

    @abstractmethod
    async def release(self, invitation_id: InvitationId) -> None:
        """Return a consumed invitation to pending.

        Compensates a consumption whose account creation failed, so the
        invitee can retry.
        """
        pass

    @abstractmethod
    async def purge_expired(self, now: datetime) -> int:
        """Delete pending invitations that have expired.

        Args:
            now: Current time

        Returns:
            Number of invitations removed
        """
        pass
