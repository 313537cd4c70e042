"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from picket.application.usecase.user import (
    ArchiveUserUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListArchivedUsersUseCase,
    ListUsersUseCase,
    UpdateProfileUseCase,
    UpdateUserUseCase,
)
from picket.application.usecase.user.archive_user import ArchiveUserRequest
from picket.application.usecase.user.create_user import CreateUserRequest
from picket.application.usecase.user.delete_user import DeleteUserRequest
from picket.application.usecase.user.get_user import GetUserRequest
from picket.application.usecase.user.list_users import (
    ListArchivedUsersResponse,
    ListUsersRequest,
    ListUsersResponse,
)
from picket.application.usecase.user.update_user import (
    UpdateProfileRequest,
    UpdateUserRequest,
)
from picket.application.usecase.user.views import ArchivedUserInfo, UserInfo
from picket.domain.model import User
from picket.interface.api.dependencies import admin_only, authenticated

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class ProfileAPIRequest(BaseModel):
    """Fields a user may change on their own profile."""

    name: str | None = None
    surname: str | None = None
    patronymic: str | None = None
    password: str | None = None


class AccountAPIRequest(ProfileAPIRequest):
    """Fields an administrator sets on any credential."""

    email: str | None = None
    role: str | None = None


# Literal paths are registered before /{user_id}
@router.post("", response_model=UserInfo, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: AccountAPIRequest,
    create_user_use_case: FromDishka[CreateUserUseCase],
    admin: User = Depends(admin_only),
) -> UserInfo:
    """Create a credential directly (administrators only)."""
    return await create_user_use_case.execute(
        CreateUserRequest(
            admin_id=str(admin.id), fields=request.model_dump(exclude_none=True)
        )
    )


@router.get("", response_model=ListUsersResponse)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    name: str | None = Query(default=None, max_length=255),
    admin: User = Depends(admin_only),
) -> ListUsersResponse:
    """List users, optionally filtered by name."""
    return await list_users_use_case.execute(ListUsersRequest(name=name))


@router.get("/archive", response_model=ListArchivedUsersResponse)
async def list_archived_users(
    list_archived_users_use_case: FromDishka[ListArchivedUsersUseCase],
    admin: User = Depends(admin_only),
) -> ListArchivedUsersResponse:
    """List archived users, newest first."""
    return await list_archived_users_use_case.execute()


@router.put("/me", response_model=UserInfo)
async def update_profile(
    request: ProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    user: User = Depends(authenticated),
) -> UserInfo:
    """Edit the caller's own names or password."""
    return await update_profile_use_case.execute(
        UpdateProfileRequest(
            user_id=str(user.id), fields=request.model_dump(exclude_none=True)
        )
    )


@router.get("/{user_id}", response_model=UserInfo)
async def get_user(
    user_id: str,
    get_user_use_case: FromDishka[GetUserUseCase],
    user: User = Depends(authenticated),
) -> UserInfo:
    """Get one user by ID."""
    return await get_user_use_case.execute(GetUserRequest(user_id=user_id))


@router.put("/{user_id}", response_model=UserInfo)
async def update_user(
    user_id: str,
    request: AccountAPIRequest,
    update_user_use_case: FromDishka[UpdateUserUseCase],
    admin: User = Depends(admin_only),
) -> UserInfo:
    """Edit any credential (administrators only)."""
    return await update_user_use_case.execute(
        UpdateUserRequest(
            admin_id=str(admin.id),
            user_id=user_id,
            fields=request.model_dump(exclude_none=True),
        )
    )


@router.put("/{user_id}/archive", response_model=ArchivedUserInfo)
async def archive_user(
    user_id: str,
    archive_user_use_case: FromDishka[ArchiveUserUseCase],
    admin: User = Depends(admin_only),
) -> ArchivedUserInfo:
    """Move a credential to the archive (administrators only)."""
    return await archive_user_use_case.execute(
        ArchiveUserRequest(admin_id=str(admin.id), user_id=user_id)
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    delete_user_use_case: FromDishka[DeleteUserUseCase],
    admin: User = Depends(admin_only),
) -> None:
    """Delete a credential permanently (administrators only)."""
    await delete_user_use_case.execute(
        DeleteUserRequest(admin_id=str(admin.id), user_id=user_id)
    )
