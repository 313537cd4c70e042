"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationRepository
from .subscription import InMemorySubscriptionRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryInvitationRepository",
    "InMemorySubscriptionRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
