"""Archive user use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from picket.domain.error import NotFoundError
from picket.domain.service import UserService
from picket.domain.value import UserId

from .views import ArchivedUserInfo


class ArchiveUserRequest(BaseModel):
    """Archive user request."""

    admin_id: str  # From authenticated admin
    user_id: str


class ArchiveUserUseCase:
    """Use case for moving a credential to the archive.

    The archived user can no longer log in and their push subscriptions
    are removed. Their email becomes free for a new account.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: ArchiveUserRequest) -> ArchivedUserInfo:
        """Archive a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        try:
            user_id = UserId(UUID(request.user_id))
        except ValueError:
            raise NotFoundError("User", request.user_id) from None

        with logfire.span(
            "archive_user.execute", admin_id=request.admin_id, user_id=request.user_id
        ):
            archived = await self.user_service.archive(user_id)
            return ArchivedUserInfo.from_archived(archived)
