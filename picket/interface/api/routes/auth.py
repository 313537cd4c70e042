"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from picket.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from picket.application.usecase.auth.get_current_user import GetCurrentUserRequest
from picket.application.usecase.auth.login import LoginRequest, LoginResponse
from picket.application.usecase.user.views import UserInfo
from picket.domain.model import User
from picket.interface.api.dependencies import authenticated

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LoginAPIRequest(BaseModel):
    """Login form."""

    email: str = ""
    password: str = ""


@router.post("", response_model=LoginResponse)
async def login(
    request: LoginAPIRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> LoginResponse:
    """Exchange email and password for a session token."""
    return await login_use_case.execute(
        LoginRequest(email=request.email, password=request.password)
    )


@router.get("", response_model=UserInfo)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    user: User = Depends(authenticated),
) -> UserInfo:
    """Return the authenticated user."""
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(user_id=str(user.id))
    )
