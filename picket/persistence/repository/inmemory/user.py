"""In-memory user repository for testing."""

from typing import Optional

from picket.domain.error import DuplicateAccountError, NotFoundError
from picket.domain.model.common import utcnow
from picket.domain.model.user import ArchivedUser, User
from picket.domain.repository.user import UserRepository
from picket.domain.value import Email, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    No method awaits between its uniqueness check and its write, so each
    call is atomic with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._archived: dict[UserId, ArchivedUser] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def search(self, name: str | None = None) -> list[User]:
        users = sorted(self._users.values(), key=lambda u: u.full_name)
        if not name:
            return users
        needle = name.strip().lower()
        return [u for u in users if needle in u.full_name.lower()]

    async def create(self, user: User) -> User:
        if self._email_taken(user.email, except_id=None):
            raise DuplicateAccountError(user.email.root)
        self._users[user.id] = user
        return user

    async def update(self, user: User) -> User:
        if user.id not in self._users:
            raise NotFoundError("User", str(user.id))
        if self._email_taken(user.email, except_id=user.id):
            raise DuplicateAccountError(user.email.root)
        self._users[user.id] = user
        return user

    async def archive(self, user_id: UserId) -> ArchivedUser | None:
        user = self._users.pop(user_id, None)
        if user is None:
            return None
        archived = ArchivedUser(**user.model_dump(), archived_at=utcnow())
        self._archived[user_id] = archived
        return archived

    async def delete(self, user_id: UserId) -> bool:
        return self._users.pop(user_id, None) is not None

    async def list_archived(self) -> list[ArchivedUser]:
        return sorted(
            self._archived.values(), key=lambda u: u.archived_at, reverse=True
        )

    def _email_taken(self, email: Email, except_id: UserId | None) -> bool:
        return any(
            u.email == email and u.id != except_id for u in self._users.values()
        )
