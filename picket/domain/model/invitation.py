"""Invitation entity.

An invitation grants the right to create exactly one credential with a
predetermined role.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from picket.domain.model.common import DomainModel, utcnow
from picket.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    Role,
    UserId,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - Issued by an admin, never for a role above the issuer's own
    - Redeemable while pending and not expired
    - Consumed exactly once; a consumed invitation never creates another account
    - Expired invitations are garbage collected, redeemed ones are kept for audit
    """

    id: InvitationId
    token: InvitationToken
    role: Role
    recipient: Email
    issued_by: Optional[UserId] = None
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    consumed_at: Optional[datetime] = None
    consumed_by: Optional[UserId] = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    def is_redeemable(self, now: datetime | None = None) -> bool:
        return self.status == InvitationStatus.PENDING and not self.is_expired(now)
