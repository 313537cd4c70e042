"""List users use case."""

from pydantic import BaseModel

from picket.domain.service import UserService

from .views import ArchivedUserInfo, UserInfo


class ListUsersRequest(BaseModel):
    """List users request."""

    name: str | None = None  # Substring of "surname name patronymic"


class ListUsersResponse(BaseModel):
    users: list[UserInfo]


class ListUsersUseCase:
    """Use case for listing and searching active users."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        users = await self.user_service.search(request.name)
        return ListUsersResponse(users=[UserInfo.from_user(u) for u in users])


class ListArchivedUsersResponse(BaseModel):
    users: list[ArchivedUserInfo]


class ListArchivedUsersUseCase:
    """Use case for listing archived users, newest first."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self) -> ListArchivedUsersResponse:
        users = await self.user_service.list_archived()
        return ListArchivedUsersResponse(
            users=[ArchivedUserInfo.from_archived(u) for u in users]
        )
