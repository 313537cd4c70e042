"""User domain service."""

from uuid import uuid4

import logfire

from picket.domain.error import NotFoundError
from picket.domain.model import ArchivedUser, User
from picket.domain.model.common import utcnow
from picket.domain.repository import SubscriptionRepository, UserRepository
from picket.domain.value import Email, Role, UserId
from picket.domain.value.forms import PersonNames

from .base import Service
from .password_service import PasswordHasher


class UserService(Service):
    """Domain service for credential operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        subscription_repository: SubscriptionRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            subscription_repository: Push subscription repository
            password_hasher: Password hasher
        """
        self.user_repository = user_repository
        self.subscription_repository = subscription_repository
        self.password_hasher = password_hasher

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_email(self, email: Email) -> User | None:
        with logfire.span("user_service.get_by_email"):
            return await self.user_repository.find_by_email(email)

    async def search(self, name: str | None = None) -> list[User]:
        with logfire.span("user_service.search", name=name):
            users = await self.user_repository.search(name)
            logfire.info("Users listed", name=name, count=len(users))
            return users

    async def create_user(
        self,
        names: PersonNames,
        email: Email,
        role: Role,
        password_hash: str,
    ) -> User:
        """Create a credential from an already hashed password.

        Args:
            names: Validated name fields
            email: Normalized email
            role: Role from a trusted source (invitation or admin)
            password_hash: bcrypt hash of the password

        Returns:
            The created user

        Raises:
            DuplicateAccountError: If the email is already taken
        """
        with logfire.span("user_service.create_user", role=role.value):
            now = utcnow()
            user = User(
                id=UserId(uuid4()),
                name=names.name,
                surname=names.surname,
                patronymic=names.patronymic,
                email=email,
                password_hash=password_hash,
                role=role,
                created_at=now,
                updated_at=now,
            )
            created = await self.user_repository.create(user)
            logfire.info("User created", user_id=str(created.id), role=role.value)
            return created

    async def update_user(
        self,
        user: User,
        names: PersonNames,
        email: Email | None = None,
        role: Role | None = None,
        password: str | None = None,
    ) -> User:
        """Apply changes to a credential.

        Fields left as None keep their current value. A new password is
        hashed before storing.

        Raises:
            DuplicateAccountError: If the new email belongs to another user
        """
        with logfire.span("user_service.update_user", user_id=str(user.id)):
            changes: dict = {
                "name": names.name,
                "surname": names.surname,
                "patronymic": names.patronymic,
                "updated_at": utcnow(),
            }
            if email is not None:
                changes["email"] = email
            if role is not None:
                changes["role"] = role
            if password:
                changes["password_hash"] = await self.password_hasher.hash_async(
                    password
                )

            updated = await self.user_repository.update(user.model_copy(update=changes))
            logfire.info(
                "User updated",
                user_id=str(user.id),
                fields=sorted(k for k in changes if k != "password_hash"),
                password_changed="password_hash" in changes,
            )
            return updated

    async def authenticate(self, email: Email, password: str) -> User | None:
        """Check email and password.

        Returns:
            The user if the credentials match, None otherwise
        """
        with logfire.span("user_service.authenticate"):
            user = await self.user_repository.find_by_email(email)
            if user is None:
                # Unknown emails cost one hash, like a wrong password
                await self.password_hasher.hash_async(password)
                return None
            if not await self.password_hasher.verify_async(password, user.password_hash):
                logfire.warn("Password mismatch", user_id=str(user.id))
                return None
            return user

    async def archive(self, user_id: UserId) -> ArchivedUser:
        """Move a user to the archive and drop their push subscriptions.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.archive", user_id=str(user_id)):
            archived = await self.user_repository.archive(user_id)
            if archived is None:
                raise NotFoundError("User", str(user_id))
            removed = await self.subscription_repository.delete_for_user(user_id)
            logfire.info(
                "User archived", user_id=str(user_id), subscriptions_removed=removed
            )
            return archived

    async def delete(self, user_id: UserId) -> None:
        """Delete a user permanently along with their push subscriptions.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.delete", user_id=str(user_id)):
            if not await self.user_repository.delete(user_id):
                raise NotFoundError("User", str(user_id))
            removed = await self.subscription_repository.delete_for_user(user_id)
            logfire.info(
                "User deleted", user_id=str(user_id), subscriptions_removed=removed
            )

    async def list_archived(self) -> list[ArchivedUser]:
        with logfire.span("user_service.list_archived"):
            return await self.user_repository.list_archived()
