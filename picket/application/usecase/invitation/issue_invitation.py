"""Issue invitation use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from picket.adapter.error import UpstreamError
from picket.application.usecase.base import BaseUseCase
from picket.config import Settings
from picket.domain.model import Invitation
from picket.domain.repository import UnitOfWork
from picket.domain.service import InvitationService, Mailer, UserService
from picket.domain.value import Role, UserId
from picket.domain.value.forms import InvitationFields, parse_form
from picket.util.tasks import BackgroundDispatcher


class IssueInvitationRequest(BaseModel):
    """Issue invitation request."""

    issuer_id: str  # From authenticated admin
    recipient: str
    role: str


class IssueInvitationResponse(BaseModel):
    """Reference to the issued invitation.

    The token itself only travels by mail.
    """

    invitation_id: str
    role: Role
    recipient: str
    expires_at: datetime


class IssueInvitationUseCase(BaseUseCase):
    """Use case for issuing an invitation and mailing its link."""

    def __init__(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        mailer: Mailer,
        unit_of_work: UnitOfWork,
        dispatcher: BackgroundDispatcher,
        settings: Settings,
    ) -> None:
        """Initialize issue invitation use case.

        Args:
            invitation_service: Invitation domain service
            user_service: User domain service
            mailer: Mail gateway
            unit_of_work: Commits the invitation before mail is sent
            dispatcher: Runs mail delivery in the background
            settings: Application settings
        """
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.mailer = mailer
        self.unit_of_work = unit_of_work
        self.dispatcher = dispatcher
        self.settings = settings

    async def execute(self, request: IssueInvitationRequest) -> IssueInvitationResponse:
        """Issue an invitation.

        Steps:
        1. Validate recipient and role
        2. Check the issuer may grant the role
        3. Store the invitation and commit
        4. Spawn mail delivery

        Raises:
            ValidationError: If recipient or role is invalid
            ForbiddenError: If the issuer may not grant the role
            NotFoundError: If the issuer no longer exists
        """
        with logfire.span("issue_invitation.execute", issuer_id=request.issuer_id):
            fields = parse_form(
                InvitationFields, {"recipient": request.recipient, "role": request.role}
            )
            issuer = await self.user_service.get_by_id(UserId(UUID(request.issuer_id)))
            self.invitation_service.ensure_can_issue(issuer, fields.role)

            invitation = await self.invitation_service.issue(
                recipient=fields.recipient, role=fields.role, issued_by=issuer.id
            )
            await self.unit_of_work.commit()

            self.dispatcher.spawn(
                self._deliver(invitation), name=f"invitation-mail-{invitation.id}"
            )

            return IssueInvitationResponse(
                invitation_id=str(invitation.id),
                role=invitation.role,
                recipient=invitation.recipient.root,
                expires_at=invitation.expires_at,
            )

    def registration_link(self, invitation: Invitation) -> str:
        frontend_url = self.settings.api.frontend_url.rstrip("/")
        path = self.settings.invitations.registration_path
        return f"{frontend_url}{path}/{invitation.token.root}"

    async def _deliver(self, invitation: Invitation) -> None:
        with logfire.span(
            "issue_invitation.deliver", invitation_id=str(invitation.id)
        ):
            try:
                await self.mailer.send(
                    to=invitation.recipient.root,
                    subject=self.settings.invitations.mail_subject,
                    body=f"Your registration link: {self.registration_link(invitation)}",
                )
            except UpstreamError as e:
                # The invitation stays valid; an admin can re-issue
                logfire.error(
                    "Invitation mail delivery failed",
                    invitation_id=str(invitation.id),
                    error=str(e),
                )
                return
            logfire.info("Invitation mail sent", invitation_id=str(invitation.id))
