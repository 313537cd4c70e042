"""Validate invitation use case."""

import logfire
from pydantic import BaseModel

from picket.domain.error import InvalidInvitationError
from picket.domain.service import InvitationService
from picket.domain.value import Role


class ValidateInvitationRequest(BaseModel):
    """Validate invitation request."""

    token: str


class ValidateInvitationResponse(BaseModel):
    """Validate invitation response."""

    valid: bool
    role: Role | None = None
    message: str


class ValidateInvitationUseCase:
    """Use case for checking a registration link before the form is shown.

    Never consumes the invitation.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: ValidateInvitationRequest
    ) -> ValidateInvitationResponse:
        try:
            token = self.invitation_service.parse_token(request.token)
            invitation = await self.invitation_service.get_redeemable(token)
        except InvalidInvitationError as e:
            return ValidateInvitationResponse(valid=False, message=str(e))

        logfire.info("Valid invitation checked", invitation_id=str(invitation.id))
        return ValidateInvitationResponse(
            valid=True, role=invitation.role, message="Valid invitation"
        )
