"""PostgreSQL repository implementations."""

from picket.persistence.repository.invitation import PostgresInvitationRepository
from picket.persistence.repository.subscription import PostgresSubscriptionRepository
from picket.persistence.repository.unit_of_work import SessionUnitOfWork
from picket.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresInvitationRepository",
    "PostgresSubscriptionRepository",
    "PostgresUserRepository",
    "SessionUnitOfWork",
]
