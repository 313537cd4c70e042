"""Domain value objects for Picket."""

from enum import Enum

import pydantic
from pydantic import EmailStr, TypeAdapter, field_validator

from picket.domain.value.common import RootValueObject, ValueObject

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


class Role(str, Enum):
    """Permission tier of a credential.

    Ordered: member < picketer < admin.
    """

    MEMBER = "member"
    PICKETER = "picketer"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    def outranks(self, other: "Role") -> bool:
        """Whether this role sits strictly above ``other``."""
        return self.rank > other.rank


_ROLE_RANKS = {Role.MEMBER: 0, Role.PICKETER: 1, Role.ADMIN: 2}


class InvitationStatus(str, Enum):
    """Status of an invitation."""

    PENDING = "pending"
    CONSUMED = "consumed"


class InvitationToken(RootValueObject[str]):
    """URL-safe, unguessable invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    @property
    def masked(self) -> str:
        """Token prefix safe to put in logs."""
        return self.root[:8] + "..."


class Email(RootValueObject[str]):
    """Email address, normalized to lower case."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        try:
            v = _EMAIL_ADAPTER.validate_python(v.strip())
        except pydantic.ValidationError:
            raise ValueError("Please include a valid email") from None
        return v.lower()


class PushKeys(ValueObject):
    """Client keys of a web push subscription."""

    p256dh: str
    auth: str
