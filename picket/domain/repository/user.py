"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from picket.domain.model.user import ArchivedUser, User
from picket.domain.value import Email, UserId


class UserRepository(ABC):
    """Repository for User aggregate (the credential store).

    Email uniqueness across active users must be enforced by the store
    itself, atomically, on both ``create`` and ``update``.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Normalized email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def search(self, name: str | None = None) -> list[User]:
        """List users, optionally filtered by full name.

        Args:
            name: Case-insensitive substring of "surname name patronymic"

        Returns:
            Matching users
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Raises:
            DuplicateAccountError: If the email is already taken
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update an existing user.

        Raises:
            DuplicateAccountError: If the new email belongs to another user
            NotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def archive(self, user_id: UserId) -> ArchivedUser | None:
        """Move a user out of the active set.

        Returns:
            The archived record, or None if the user does not exist
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Remove a user permanently, without archiving.

        Returns:
            True if a user was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def list_archived(self) -> list[ArchivedUser]:
        """List archived users, most recently archived first."""
        pass
