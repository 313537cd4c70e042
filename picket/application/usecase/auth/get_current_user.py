"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from picket.application.usecase.user.views import UserInfo
from picket.domain.service import UserService
from picket.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    user_id: str  # From the verified session token


class GetCurrentUserUseCase:
    """Use case for getting the authenticated user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> UserInfo:
        """Load the authenticated user.

        Raises:
            NotFoundError: If the user no longer exists
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        return UserInfo.from_user(user)
