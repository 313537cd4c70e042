"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from picket.domain.error import DuplicateAccountError, NotFoundError
from picket.domain.model import ArchivedUser, User
from picket.domain.model.common import utcnow
from picket.domain.repository import UserRepository
from picket.domain.value import Email, UserId
from picket.persistence.mappers import (
    row_to_archived_user,
    row_to_user,
    user_to_dict,
)
from picket.persistence.tables import archived_users_table, users_table

UNIQUE_EMAIL_INDEX = "uq_users_email"


def _contains_pattern(text: str) -> str:
    """ILIKE pattern matching ``text`` literally anywhere."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _is_email_conflict(error: IntegrityError) -> bool:
    return UNIQUE_EMAIL_INDEX in str(error.orig)


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Normalized email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def search(self, name: str | None = None) -> list[User]:
        """List users ordered by full name, optionally filtered by it."""
        full_name = func.concat_ws(
            " ",
            users_table.c.surname,
            users_table.c.name,
            users_table.c.patronymic,
        )
        stmt = select(users_table).order_by(full_name)
        if name:
            pattern = _contains_pattern(name.strip())
            stmt = stmt.where(full_name.ilike(pattern, escape="\\"))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings()]

    async def create(self, user: User) -> User:
        """Insert a new user.

        The insert runs in a savepoint so that a unique violation leaves the
        surrounding transaction usable.

        Raises:
            DuplicateAccountError: If the email is already taken
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(users_table).values(**user_to_dict(user))
                )
        except IntegrityError as e:
            if _is_email_conflict(e):
                raise DuplicateAccountError(user.email.root) from None
            raise
        return user

    async def update(self, user: User) -> User:
        """Update an existing user.

        Raises:
            DuplicateAccountError: If the new email belongs to another user
            NotFoundError: If the user does not exist
        """
        values = user_to_dict(user)
        values.pop("id")
        values.pop("created_at")
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(
                    update(users_table)
                    .where(users_table.c.id == user.id)
                    .values(**values)
                )
        except IntegrityError as e:
            if _is_email_conflict(e):
                raise DuplicateAccountError(user.email.root) from None
            raise
        if result.rowcount == 0:
            raise NotFoundError("User", str(user.id))
        return user

    async def archive(self, user_id: UserId) -> ArchivedUser | None:
        """Move a user row into the archive table.

        Args:
            user_id: User to archive

        Returns:
            The archived record, or None if the user does not exist
        """
        stmt = (
            delete(users_table)
            .where(users_table.c.id == user_id)
            .returning(*users_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None

        archived_row = dict(row)
        archived_row["archived_at"] = utcnow()
        await self.session.execute(insert(archived_users_table).values(**archived_row))
        await self.session.flush()
        return row_to_archived_user(archived_row)

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user row; push subscriptions go with it by cascade."""
        result = await self.session.execute(
            delete(users_table).where(users_table.c.id == user_id)
        )
        return result.rowcount > 0

    async def list_archived(self) -> list[ArchivedUser]:
        stmt = select(archived_users_table).order_by(
            archived_users_table.c.archived_at.desc()
        )
        result = await self.session.execute(stmt)
        return [row_to_archived_user(dict(row)) for row in result.mappings()]
