"""Create user use case (administrator)."""

from typing import Any

import logfire
from pydantic import BaseModel

from picket.domain.error import DuplicateAccountError
from picket.domain.service import PasswordHasher, UserService
from picket.domain.value.forms import NewAccountFields, parse_form

from .views import UserInfo


class CreateUserRequest(BaseModel):
    """Create user request."""

    admin_id: str  # From authenticated admin
    fields: dict[str, Any]


class CreateUserUseCase:
    """Use case for an administrator creating a credential directly.

    The role is taken from the form only because the route is restricted
    to administrators.
    """

    def __init__(self, user_service: UserService, password_hasher: PasswordHasher) -> None:
        """Initialize create user use case.

        Args:
            user_service: User domain service
            password_hasher: Password hasher
        """
        self.user_service = user_service
        self.password_hasher = password_hasher

    async def execute(self, request: CreateUserRequest) -> UserInfo:
        """Create a credential.

        Raises:
            ValidationError: If any field is invalid
            DuplicateAccountError: If the email is already registered
        """
        fields = parse_form(NewAccountFields, request.fields)

        with logfire.span(
            "create_user.execute", admin_id=request.admin_id, role=fields.role.value
        ):
            if await self.user_service.get_by_email(fields.email) is not None:
                raise DuplicateAccountError(fields.email.root)

            password_hash = await self.password_hasher.hash_async(fields.password)
            user = await self.user_service.create_user(
                names=fields,
                email=fields.email,
                role=fields.role,
                password_hash=password_hash,
            )
            return UserInfo.from_user(user)
