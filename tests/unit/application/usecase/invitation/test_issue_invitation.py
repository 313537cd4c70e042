"""Unit tests for IssueInvitationUseCase."""

from uuid import UUID, uuid4

import pytest

from picket.application.usecase.invitation import IssueInvitationUseCase
from picket.application.usecase.invitation.issue_invitation import (
    IssueInvitationRequest,
)
from picket.domain.error import ForbiddenError, NotFoundError, ValidationError
from picket.domain.repository import InvitationRepository, UnitOfWork
from picket.domain.service import Mailer
from picket.domain.value import InvitationToken, Role
from picket.util.tasks import BackgroundDispatcher
from tests.harness import create_env_fixture, seed_user

unit_env = create_env_fixture()


class TestIssueInvitation:
    @pytest.mark.asyncio
    async def test_admin_issues_and_link_is_mailed(self, unit_env):
        admin = await seed_user(unit_env, "admin@x.com", Role.ADMIN)
        use_case = await unit_env.get(IssueInvitationUseCase)
        mailer = await unit_env.get(Mailer)
        dispatcher = await unit_env.get(BackgroundDispatcher)
        invitations = await unit_env.get(InvitationRepository)
        unit_of_work = await unit_env.get(UnitOfWork)

        response = await use_case.execute(
            IssueInvitationRequest(
                issuer_id=str(admin.id), recipient="New@X.com", role="picketer"
            )
        )
        await dispatcher.drain()

        assert response.role == Role.PICKETER
        assert response.recipient == "new@x.com"
        assert unit_of_work.commits >= 1

        [message] = mailer.outbox
        assert message["To"] == "new@x.com"
        assert message["Subject"] == "Picketer Invitation"
        body = message.get_content()
        assert body.startswith("Your registration link: http://localhost:3000/invite/")

        token = body.strip().rsplit("/", 1)[1]

        stored = await invitations.find_by_token(InvitationToken(token))
        assert str(stored.id) == response.invitation_id
        assert stored.issued_by == admin.id

    @pytest.mark.asyncio
    async def test_mail_failure_does_not_fail_issuance(self, unit_env):
        admin = await seed_user(unit_env, "admin@x.com", Role.ADMIN)
        use_case = await unit_env.get(IssueInvitationUseCase)
        mailer = await unit_env.get(Mailer)
        dispatcher = await unit_env.get(BackgroundDispatcher)
        invitations = await unit_env.get(InvitationRepository)
        mailer.fail = True

        response = await use_case.execute(
            IssueInvitationRequest(
                issuer_id=str(admin.id), recipient="new@x.com", role="member"
            )
        )
        await dispatcher.drain()

        assert mailer.outbox == []

        stored = await invitations.find_by_id(UUID(response.invitation_id))
        assert stored.is_redeemable()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("issuer_role", [Role.MEMBER, Role.PICKETER])
    async def test_non_admin_is_forbidden(self, unit_env, issuer_role):
        issuer = await seed_user(unit_env, "someone@x.com", issuer_role)
        use_case = await unit_env.get(IssueInvitationUseCase)
        mailer = await unit_env.get(Mailer)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                IssueInvitationRequest(
                    issuer_id=str(issuer.id), recipient="new@x.com", role="member"
                )
            )
        assert mailer.outbox == []

    @pytest.mark.asyncio
    async def test_invalid_fields(self, unit_env):
        admin = await seed_user(unit_env, "admin@x.com", Role.ADMIN)
        use_case = await unit_env.get(IssueInvitationUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                IssueInvitationRequest(
                    issuer_id=str(admin.id), recipient="nope", role="overlord"
                )
            )

        assert set(exc_info.value.fields) == {"recipient", "role"}

    @pytest.mark.asyncio
    async def test_vanished_issuer(self, unit_env):
        use_case = await unit_env.get(IssueInvitationUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                IssueInvitationRequest(
                    issuer_id=str(uuid4()), recipient="new@x.com", role="member"
                )
            )
