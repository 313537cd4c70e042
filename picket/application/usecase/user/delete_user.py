"""Delete user use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from picket.domain.error import NotFoundError
from picket.domain.service import UserService
from picket.domain.value import UserId


class DeleteUserRequest(BaseModel):
    """Delete user request."""

    admin_id: str  # From authenticated admin
    user_id: str


class DeleteUserUseCase:
    """Use case for removing a credential outright.

    Unlike archiving, nothing of the user is kept besides the ids recorded
    on invitations they issued or redeemed.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: DeleteUserRequest) -> None:
        """Delete a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        try:
            user_id = UserId(UUID(request.user_id))
        except ValueError:
            raise NotFoundError("User", request.user_id) from None

        with logfire.span(
            "delete_user.execute", admin_id=request.admin_id, user_id=request.user_id
        ):
            await self.user_service.delete(user_id)
