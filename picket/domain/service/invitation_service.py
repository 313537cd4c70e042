"""Invitation domain service."""

import secrets
from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from picket.domain.error import ForbiddenError, InvalidInvitationError
from picket.domain.model.common import utcnow
from picket.domain.model.invitation import Invitation
from picket.domain.model.user import User
from picket.domain.repository import InvitationRepository
from picket.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    Role,
    UserId,
)

from .base import Service


class InvitationService(Service):
    """Domain service for invitation issuance and redemption."""

    def __init__(
        self, invitation_repository: InvitationRepository, ttl_days: int = 30
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            ttl_days: Days an unredeemed invitation stays valid
        """
        self.invitation_repository = invitation_repository
        self.ttl = timedelta(days=ttl_days)

    @staticmethod
    def ensure_can_issue(issuer: User, role: Role) -> None:
        """Check the issuer may grant ``role``.

        Only admins issue invitations, and never for a role above their own.

        Raises:
            ForbiddenError: If the issuer may not grant the role
        """
        if issuer.role != Role.ADMIN or role.outranks(issuer.role):
            logfire.warn(
                "Invitation issuance refused",
                issuer_id=str(issuer.id),
                issuer_role=issuer.role.value,
                granted_role=role.value,
            )
            raise ForbiddenError(f"Role {issuer.role.value} cannot invite {role.value}")

    @staticmethod
    def parse_token(raw: str) -> InvitationToken:
        """Wrap a raw token from a URL.

        Raises:
            InvalidInvitationError: If the value cannot be a token at all
        """
        try:
            return InvitationToken(raw)
        except ValueError:
            raise InvalidInvitationError() from None

    async def issue(
        self, recipient: Email, role: Role, issued_by: UserId | None
    ) -> Invitation:
        """Create and store a new pending invitation.

        Args:
            recipient: Email the invitation link is sent to
            role: Role granted on redemption
            issued_by: Issuing admin, None for bootstrap invitations

        Returns:
            The stored invitation, including its token
        """
        with logfire.span(
            "invitation_service.issue",
            role=role.value,
            issued_by=str(issued_by) if issued_by else None,
        ):
            now = utcnow()
            invitation = Invitation(
                id=InvitationId(uuid4()),
                token=InvitationToken(secrets.token_urlsafe(32)),
                role=role,
                recipient=recipient,
                issued_by=issued_by,
                status=InvitationStatus.PENDING,
                created_at=now,
                expires_at=now + self.ttl,
            )
            saved = await self.invitation_repository.save(invitation)
            logfire.info(
                "Invitation issued",
                invitation_id=str(saved.id),
                role=role.value,
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def get_redeemable(self, token: InvitationToken) -> Invitation:
        """Look up an invitation that can still be redeemed.

        Args:
            token: Invitation token

        Returns:
            The pending, unexpired invitation

        Raises:
            InvalidInvitationError: If unknown, expired or already consumed
        """
        with logfire.span("invitation_service.get_redeemable", token=token.masked):
            invitation = await self.invitation_repository.find_by_token(token)
            if invitation is None:
                logfire.info("Invitation not found", token=token.masked)
                raise InvalidInvitationError()
            if not invitation.is_redeemable():
                logfire.info(
                    "Invitation not redeemable",
                    invitation_id=str(invitation.id),
                    status=invitation.status.value,
                    expired=invitation.is_expired(),
                )
                raise InvalidInvitationError()
            return invitation

    async def consume(self, token: InvitationToken) -> Invitation:
        """Atomically consume an invitation.

        Raises:
            InvalidInvitationError: If another request consumed it first or
                it expired in the meantime
        """
        with logfire.span("invitation_service.consume", token=token.masked):
            invitation = await self.invitation_repository.consume(token, utcnow())
            if invitation is None:
                logfire.warn("Invitation consumption lost", token=token.masked)
                raise InvalidInvitationError()
            logfire.info("Invitation consumed", invitation_id=str(invitation.id))
            return invitation

    async def record_redemption(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> None:
        """Link a consumed invitation to the credential it created."""
        await self.invitation_repository.mark_consumed_by(invitation_id, user_id)

    async def release(self, invitation_id: InvitationId) -> None:
        """Undo a consumption whose account creation failed."""
        with logfire.span(
            "invitation_service.release", invitation_id=str(invitation_id)
        ):
            await self.invitation_repository.release(invitation_id)
            logfire.info("Invitation released", invitation_id=str(invitation_id))

    async def purge_expired(self, now: datetime | None = None) -> int:
        """Garbage collect expired, unredeemed invitations.

        Returns:
            Number of invitations removed
        """
        with logfire.span("invitation_service.purge_expired"):
            removed = await self.invitation_repository.purge_expired(now or utcnow())
            logfire.info("Expired invitations purged", removed=removed)
            return removed
