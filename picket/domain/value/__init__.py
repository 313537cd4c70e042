"""Domain value objects for Picket."""

from picket.domain.value.identifiers import InvitationId, SubscriptionId, UserId
from picket.domain.value.types import (
    Email,
    InvitationStatus,
    InvitationToken,
    PushKeys,
    Role,
)

__all__ = [
    # Identifiers
    "UserId",
    "InvitationId",
    "SubscriptionId",
    # Types
    "Email",
    "InvitationStatus",
    "InvitationToken",
    "PushKeys",
    "Role",
]
