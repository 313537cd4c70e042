"""Unit tests for ValidateInvitationUseCase."""

import pytest

from picket.application.usecase.invitation import ValidateInvitationUseCase
from picket.application.usecase.invitation.validate_invitation import (
    ValidateInvitationRequest,
)
from picket.domain.service import InvitationService
from picket.domain.value import Email, InvitationStatus, Role
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestValidateInvitation:
    @pytest.mark.asyncio
    async def test_pending_invitation_is_valid_and_stays_pending(self, unit_env):
        service = await unit_env.get(InvitationService)
        use_case = await unit_env.get(ValidateInvitationUseCase)
        invitation = await service.issue(Email("a@x.com"), Role.PICKETER, None)

        for _ in range(2):
            response = await use_case.execute(
                ValidateInvitationRequest(token=invitation.token.root)
            )
            assert response.valid is True
            assert response.role == Role.PICKETER

        again = await service.get_redeemable(invitation.token)
        assert again.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_consumed_invitation_is_invalid(self, unit_env):
        service = await unit_env.get(InvitationService)
        use_case = await unit_env.get(ValidateInvitationUseCase)
        invitation = await service.issue(Email("a@x.com"), Role.MEMBER, None)
        await service.consume(invitation.token)

        response = await use_case.execute(
            ValidateInvitationRequest(token=invitation.token.root)
        )

        assert response.valid is False
        assert response.role is None
        assert response.message == "Invitation is not valid"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["unknown", "x" * 300])
    async def test_unknown_or_malformed_token(self, unit_env, token):
        use_case = await unit_env.get(ValidateInvitationUseCase)

        response = await use_case.execute(ValidateInvitationRequest(token=token))

        assert response.valid is False
