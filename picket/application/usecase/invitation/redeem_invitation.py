"""Redeem invitation use case."""

from typing import Any

import logfire
from pydantic import BaseModel

from picket.application.usecase.base import BaseUseCase
from picket.domain.error import DuplicateAccountError
from picket.domain.repository import UnitOfWork
from picket.domain.service import (
    InvitationService,
    JWTService,
    PasswordHasher,
    UserService,
)
from picket.domain.value import Role
from picket.domain.value.forms import RegistrationFields, parse_form


class RedeemInvitationRequest(BaseModel):
    """Redeem invitation request."""

    token: str  # From the registration link
    fields: dict[str, Any]  # Raw registration form; any "role" key is ignored


class RedeemInvitationResponse(BaseModel):
    """Session for the newly created account."""

    token: str
    user_id: str
    role: Role


class RedeemInvitationUseCase(BaseUseCase):
    """Use case for creating an account from an invitation.

    An invitation produces at most one account. If account creation fails
    after the invitation was consumed, the invitation is released again so
    the invitee can retry.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        password_hasher: PasswordHasher,
        jwt_service: JWTService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize redeem invitation use case.

        Args:
            invitation_service: Invitation domain service
            user_service: User domain service
            password_hasher: Password hasher
            jwt_service: Session token service
            unit_of_work: Commits the account before the session is issued
        """
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.password_hasher = password_hasher
        self.jwt_service = jwt_service
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: RedeemInvitationRequest
    ) -> RedeemInvitationResponse:
        """Redeem an invitation.

        Steps:
        1. Find a pending, unexpired invitation
        2. Validate every registration field
        3. Reject a known email early
        4. Hash the password
        5. Consume the invitation atomically
        6. Create the account with the invitation's role
        7. Commit, then issue the session token

        Raises:
            InvalidInvitationError: If the token is unknown, expired or used
            ValidationError: If any registration field is invalid
            DuplicateAccountError: If the email is already registered
        """
        token = self.invitation_service.parse_token(request.token)

        with logfire.span("redeem_invitation.execute", token=token.masked):
            invitation = await self.invitation_service.get_redeemable(token)
            fields = parse_form(RegistrationFields, request.fields)

            if await self.user_service.get_by_email(fields.email) is not None:
                logfire.info(
                    "Registration with a known email",
                    invitation_id=str(invitation.id),
                )
                raise DuplicateAccountError(fields.email.root)

            password_hash = await self.password_hasher.hash_async(fields.password)

            invitation = await self.invitation_service.consume(token)
            try:
                user = await self.user_service.create_user(
                    names=fields,
                    email=fields.email,
                    role=invitation.role,
                    password_hash=password_hash,
                )
            except DuplicateAccountError:
                # Lost the email race to a concurrent registration
                await self.invitation_service.release(invitation.id)
                await self.unit_of_work.commit()
                raise

            await self.invitation_service.record_redemption(invitation.id, user.id)
            await self.unit_of_work.commit()

            logfire.info(
                "Invitation redeemed",
                invitation_id=str(invitation.id),
                user_id=str(user.id),
                role=user.role.value,
            )

            return RedeemInvitationResponse(
                token=self.jwt_service.create_token(str(user.id)),
                user_id=str(user.id),
                role=user.role,
            )
