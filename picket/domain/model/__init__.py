"""Domain model entities for Picket."""

from picket.domain.model.invitation import Invitation
from picket.domain.model.subscription import PushSubscription
from picket.domain.model.user import ArchivedUser, User

__all__ = [
    "ArchivedUser",
    "Invitation",
    "PushSubscription",
    "User",
]
