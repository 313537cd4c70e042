"""User (credential) aggregate root."""

from datetime import datetime

from pydantic import Field

from picket.domain.model.common import DomainModel, utcnow
from picket.domain.value import Email, Role, UserId


class User(DomainModel):
    """User aggregate root.

    The raw password is never stored; only its bcrypt hash.
    The role is set from a trusted source: the redeemed invitation or an
    administrator.
    """

    id: UserId
    name: str
    surname: str
    patronymic: str
    email: Email
    password_hash: str = Field(repr=False)
    role: Role
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.surname} {self.name} {self.patronymic}"


class ArchivedUser(User):
    """A user moved out of the active set."""

    archived_at: datetime = Field(default_factory=utcnow)
