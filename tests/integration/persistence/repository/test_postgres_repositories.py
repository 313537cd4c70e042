"""Integration tests for the PostgreSQL repositories.

Skipped unless DATABASE__URL points at a migrated database.
"""

import asyncio
import os
from uuid import UUID, uuid4

import pytest

from picket.application.usecase.invitation import RedeemInvitationUseCase
from picket.application.usecase.invitation.redeem_invitation import (
    RedeemInvitationRequest,
)
from picket.domain.error import DuplicateAccountError, InvalidInvitationError
from picket.domain.model import PushSubscription
from picket.domain.repository import (
    InvitationRepository,
    SubscriptionRepository,
    UnitOfWork,
    UserRepository,
)
from picket.domain.service import InvitationService, UserService
from picket.domain.value import (
    Email,
    InvitationStatus,
    PushKeys,
    Role,
    SubscriptionId,
    UserId,
)
from picket.domain.value.forms import PersonNames
from tests.di import build_test_container
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
)

integration_env = create_env_fixture(unmock={"persistence"})

NAMES = PersonNames(name="Anna", surname="Smirnova", patronymic="Olegovna")


def unique_email() -> str:
    return f"{uuid4().hex[:12]}@it.example.com"


def registration(email: str) -> dict:
    return {**NAMES.model_dump(), "email": email, "password": "secret1"}


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_duplicate_email_keeps_transaction_usable(self, integration_env):
        service = await integration_env.get(UserService)
        users = await integration_env.get(UserRepository)
        email = Email(unique_email())
        first = await service.create_user(NAMES, email, Role.MEMBER, "hash")

        with pytest.raises(DuplicateAccountError):
            await service.create_user(NAMES, email, Role.MEMBER, "hash")

        # The savepoint rolled back alone
        assert await users.find_by_id(first.id) == first

    @pytest.mark.asyncio
    async def test_archive_moves_row(self, integration_env):
        service = await integration_env.get(UserService)
        users = await integration_env.get(UserRepository)
        user = await service.create_user(
            NAMES, Email(unique_email()), Role.MEMBER, "hash"
        )

        archived = await users.archive(user.id)

        assert archived.email == user.email
        assert await users.find_by_id(user.id) is None

    @pytest.mark.asyncio
    async def test_search_matches_wildcards_literally(self, integration_env):
        service = await integration_env.get(UserService)
        marker = uuid4().hex[:10]
        plain = await service.create_user(
            PersonNames(name="Anna", surname=f"Plain{marker}", patronymic="Olegovna"),
            Email(unique_email()),
            Role.MEMBER,
            "hash",
        )
        underscored = await service.create_user(
            PersonNames(name="Anna", surname=f"Under_{marker}", patronymic="Olegovna"),
            Email(unique_email()),
            Role.MEMBER,
            "hash",
        )

        found = {u.id for u in await service.search("_")}

        assert underscored.id in found
        assert plain.id not in found
        assert await service.search(f"%{marker}") == []


class TestSubscriptionRepository:
    @pytest.mark.asyncio
    async def test_upsert_rebinds_endpoint(self, integration_env):
        service = await integration_env.get(UserService)
        subscriptions = await integration_env.get(SubscriptionRepository)
        alice = await service.create_user(
            NAMES, Email(unique_email()), Role.MEMBER, "hash"
        )
        bob = await service.create_user(NAMES, Email(unique_email()), Role.MEMBER, "hash")
        endpoint = f"https://push.example/{uuid4().hex}"

        def subscription(user):
            return PushSubscription(
                id=SubscriptionId(uuid4()),
                user_id=user.id,
                endpoint=endpoint,
                keys=PushKeys(p256dh="k", auth="a"),
            )

        first = await subscriptions.upsert(subscription(alice))
        second = await subscriptions.upsert(subscription(bob))

        assert second.id == first.id
        assert second.user_id == bob.id
        assert await subscriptions.find_by_user(alice.id) == []


class TestConcurrentRedemption:
    @pytest.mark.asyncio
    async def test_same_token_consumed_once(self):
        container = build_test_container(unmock={"persistence"})
        try:
            async with container() as setup:
                invitation = await (await setup.get(InvitationService)).issue(
                    Email(unique_email()), Role.PICKETER, None
                )
                await (await setup.get(UnitOfWork)).commit()

            async with container() as env_a, container() as env_b:
                use_case_a = await env_a.get(RedeemInvitationUseCase)
                use_case_b = await env_b.get(RedeemInvitationUseCase)
                results = await asyncio.gather(
                    use_case_a.execute(
                        RedeemInvitationRequest(
                            token=invitation.token.root,
                            fields=registration(unique_email()),
                        )
                    ),
                    use_case_b.execute(
                        RedeemInvitationRequest(
                            token=invitation.token.root,
                            fields=registration(unique_email()),
                        )
                    ),
                    return_exceptions=True,
                )

            failures = [r for r in results if isinstance(r, Exception)]
            assert len(failures) == 1
            assert isinstance(failures[0], InvalidInvitationError)

            async with container() as check:
                stored = await (await check.get(InvitationRepository)).find_by_id(
                    invitation.id
                )
                winner = next(r for r in results if not isinstance(r, Exception))
                assert str(stored.consumed_by) == winner.user_id
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_same_email_creates_one_account(self):
        container = build_test_container(unmock={"persistence"})
        email = unique_email()
        try:
            async with container() as setup:
                service = await setup.get(InvitationService)
                first = await service.issue(Email(email), Role.MEMBER, None)
                second = await service.issue(Email(email), Role.MEMBER, None)
                await (await setup.get(UnitOfWork)).commit()

            async with container() as env_a, container() as env_b:
                use_case_a = await env_a.get(RedeemInvitationUseCase)
                use_case_b = await env_b.get(RedeemInvitationUseCase)
                results = await asyncio.gather(
                    use_case_a.execute(
                        RedeemInvitationRequest(
                            token=first.token.root, fields=registration(email)
                        )
                    ),
                    use_case_b.execute(
                        RedeemInvitationRequest(
                            token=second.token.root, fields=registration(email)
                        )
                    ),
                    return_exceptions=True,
                )

            failures = [r for r in results if isinstance(r, Exception)]
            assert len(failures) == 1
            assert isinstance(failures[0], DuplicateAccountError)

            async with container() as check:
                invitations = await check.get(InvitationRepository)
                statuses = sorted(
                    [
                        (await invitations.find_by_id(i.id)).status.value
                        for i in (first, second)
                    ]
                )
                assert statuses == ["consumed", "pending"]
        finally:
            await container.close()


class TestRequestSession:
    @pytest.mark.asyncio
    async def test_failed_request_leaves_invitation_pending(self):
        container = build_test_container(unmock={"persistence"})
        try:
            async with container() as setup:
                invitation = await (await setup.get(InvitationService)).issue(
                    Email(unique_email()), Role.MEMBER, None
                )
                await (await setup.get(UnitOfWork)).commit()

            with pytest.raises(RuntimeError):
                async with container() as request:
                    await (await request.get(InvitationService)).consume(
                        invitation.token
                    )
                    raise RuntimeError("insert failed")

            async with container() as check:
                stored = await (await check.get(InvitationRepository)).find_by_id(
                    invitation.id
                )
                assert stored.status == InvitationStatus.PENDING
                assert stored.consumed_at is None
        finally:
            await container.close()


class TestInvitationAudit:
    @pytest.mark.asyncio
    async def test_issuer_and_redeemer_ids_survive_removal(self):
        container = build_test_container(unmock={"persistence"})
        try:
            async with container() as setup:
                admin = await (await setup.get(UserService)).create_user(
                    NAMES, Email(unique_email()), Role.ADMIN, "hash"
                )
                invitation = await (await setup.get(InvitationService)).issue(
                    Email(unique_email()), Role.MEMBER, admin.id
                )
                await (await setup.get(UnitOfWork)).commit()

            async with container() as request:
                info = await (await request.get(RedeemInvitationUseCase)).execute(
                    RedeemInvitationRequest(
                        token=invitation.token.root,
                        fields=registration(unique_email()),
                    )
                )

            async with container() as request:
                service = await request.get(UserService)
                await service.delete(UserId(UUID(info.user_id)))
                await service.archive(admin.id)

            async with container() as check:
                stored = await (await check.get(InvitationRepository)).find_by_id(
                    invitation.id
                )
                assert str(stored.consumed_by) == info.user_id
                assert stored.issued_by == admin.id
        finally:
            await container.close()
