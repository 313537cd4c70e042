"""Response shapes shared by user use cases."""

from datetime import datetime

from pydantic import BaseModel

from picket.domain.model import ArchivedUser, User
from picket.domain.value import Role


class UserInfo(BaseModel):
    """A credential as shown to clients. Never includes the password hash."""

    user_id: str
    name: str
    surname: str
    patronymic: str
    email: str
    role: Role
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            user_id=str(user.id),
            name=user.name,
            surname=user.surname,
            patronymic=user.patronymic,
            email=user.email.root,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ArchivedUserInfo(UserInfo):
    archived_at: datetime

    @classmethod
    def from_archived(cls, user: ArchivedUser) -> "ArchivedUserInfo":
        return cls(
            **UserInfo.from_user(user).model_dump(), archived_at=user.archived_at
        )
