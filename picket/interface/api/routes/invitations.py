"""Invitation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from picket.application.usecase.invitation import (
    IssueInvitationUseCase,
    RedeemInvitationUseCase,
    ValidateInvitationUseCase,
)
from picket.application.usecase.invitation.issue_invitation import (
    IssueInvitationRequest,
    IssueInvitationResponse,
)
from picket.application.usecase.invitation.redeem_invitation import (
    RedeemInvitationRequest,
    RedeemInvitationResponse,
)
from picket.application.usecase.invitation.validate_invitation import (
    ValidateInvitationRequest,
    ValidateInvitationResponse,
)
from picket.domain.model import User
from picket.interface.api.dependencies import admin_only

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class IssueInvitationAPIRequest(BaseModel):
    """Invitation to send."""

    email: str = ""
    role: str = ""


class RegistrationAPIRequest(BaseModel):
    """Registration form submitted from the invitation link.

    Missing fields are reported together with invalid ones.
    """

    name: str | None = None
    surname: str | None = None
    patronymic: str | None = None
    email: str | None = None
    password: str | None = None


@router.post(
    "", response_model=IssueInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def issue_invitation(
    request: IssueInvitationAPIRequest,
    issue_invitation_use_case: FromDishka[IssueInvitationUseCase],
    admin: User = Depends(admin_only),
) -> IssueInvitationResponse:
    """Issue an invitation and mail its registration link."""
    return await issue_invitation_use_case.execute(
        IssueInvitationRequest(
            issuer_id=str(admin.id), recipient=request.email, role=request.role
        )
    )


@router.get("/{token}", response_model=ValidateInvitationResponse)
async def validate_invitation(
    token: str,
    validate_invitation_use_case: FromDishka[ValidateInvitationUseCase],
) -> ValidateInvitationResponse:
    """Check whether a registration link can still be used."""
    return await validate_invitation_use_case.execute(
        ValidateInvitationRequest(token=token)
    )


@router.post(
    "/{token}/register",
    response_model=RedeemInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    token: str,
    request: RegistrationAPIRequest,
    redeem_invitation_use_case: FromDishka[RedeemInvitationUseCase],
) -> RedeemInvitationResponse:
    """Create an account from an invitation and start a session."""
    return await redeem_invitation_use_case.execute(
        RedeemInvitationRequest(token=token, fields=request.model_dump(exclude_none=True))
    )
