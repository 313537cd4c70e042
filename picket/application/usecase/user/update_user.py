"""Update user use cases."""

from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel

from picket.domain.error import NotFoundError
from picket.domain.service import UserService
from picket.domain.value import UserId
from picket.domain.value.forms import AccountFields, ProfileFields, parse_form

from .views import UserInfo


class UpdateUserRequest(BaseModel):
    """Administrative edit request."""

    admin_id: str  # From authenticated admin
    user_id: str  # Credential being edited
    fields: dict[str, Any]


class UpdateUserUseCase:
    """Use case for an administrator editing any credential.

    Names, email, role and password may all change.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateUserRequest) -> UserInfo:
        """Apply an administrative edit.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If any field is invalid
            DuplicateAccountError: If the new email belongs to another user
        """
        try:
            user_id = UserId(UUID(request.user_id))
        except ValueError:
            raise NotFoundError("User", request.user_id) from None

        with logfire.span(
            "update_user.execute", admin_id=request.admin_id, user_id=request.user_id
        ):
            user = await self.user_service.get_by_id(user_id)
            fields = parse_form(AccountFields, request.fields)
            updated = await self.user_service.update_user(
                user,
                names=fields,
                email=fields.email,
                role=fields.role,
                password=fields.password,
            )
            return UserInfo.from_user(updated)


class UpdateProfileRequest(BaseModel):
    """Own profile edit request."""

    user_id: str  # From authenticated user
    fields: dict[str, Any]  # Email and role keys are ignored


class UpdateProfileUseCase:
    """Use case for a user editing their own profile.

    Only names and password can change; email and role stay as they are.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateProfileRequest) -> UserInfo:
        """Apply a profile edit.

        Raises:
            NotFoundError: If the user no longer exists
            ValidationError: If any field is invalid
        """
        with logfire.span("update_profile.execute", user_id=request.user_id):
            user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
            fields = parse_form(ProfileFields, request.fields)
            updated = await self.user_service.update_user(
                user, names=fields, password=fields.password
            )
            return UserInfo.from_user(updated)
