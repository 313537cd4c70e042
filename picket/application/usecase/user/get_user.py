"""Get user use case."""

from uuid import UUID

from pydantic import BaseModel

from picket.domain.error import NotFoundError
from picket.domain.service import UserService
from picket.domain.value import UserId

from .views import UserInfo


class GetUserRequest(BaseModel):
    """Get user request."""

    user_id: str


class GetUserUseCase:
    """Use case for looking up one user by ID."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetUserRequest) -> UserInfo:
        """Load a user.

        Raises:
            NotFoundError: If the ID is malformed or unknown
        """
        try:
            user_id = UserId(UUID(request.user_id))
        except ValueError:
            raise NotFoundError("User", request.user_id) from None
        user = await self.user_service.get_by_id(user_id)
        return UserInfo.from_user(user)
