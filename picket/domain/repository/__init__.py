"""Repository interfaces for the Picket domain.

Interfaces live in the domain layer; implementations live in persistence.
"""

from picket.domain.repository.invitation import InvitationRepository
from picket.domain.repository.subscription import SubscriptionRepository
from picket.domain.repository.unit_of_work import UnitOfWork
from picket.domain.repository.user import UserRepository

__all__ = [
    "InvitationRepository",
    "SubscriptionRepository",
    "UnitOfWork",
    "UserRepository",
]
