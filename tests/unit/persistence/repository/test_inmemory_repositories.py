"""Unit tests for the in-memory repositories used by the test container."""

from datetime import timedelta
from uuid import uuid4

import pytest

from picket.domain.error import DuplicateAccountError, NotFoundError
from picket.domain.model import Invitation, User
from picket.domain.model.common import utcnow
from picket.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    Role,
    UserId,
)
from picket.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryUserRepository,
)


def make_user(email: str) -> User:
    return User(
        id=UserId(uuid4()),
        name="Anna",
        surname="Smirnova",
        patronymic="Olegovna",
        email=Email(email),
        password_hash="x",
        role=Role.MEMBER,
    )


def make_invitation(token: str, expires_in: timedelta = timedelta(days=1)):
    return Invitation(
        id=InvitationId(uuid4()),
        token=InvitationToken(token),
        role=Role.MEMBER,
        recipient=Email("a@x.com"),
        expires_at=utcnow() + expires_in,
    )


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_update_unknown_user(self):
        repo = InMemoryUserRepository()

        with pytest.raises(NotFoundError):
            await repo.update(make_user("a@x.com"))

    @pytest.mark.asyncio
    async def test_update_keeping_own_email(self):
        repo = InMemoryUserRepository()
        user = await repo.create(make_user("a@x.com"))

        updated = await repo.update(user.model_copy(update={"name": "Olga"}))

        assert updated.name == "Olga"

    @pytest.mark.asyncio
    async def test_create_duplicate(self):
        repo = InMemoryUserRepository()
        await repo.create(make_user("a@x.com"))

        with pytest.raises(DuplicateAccountError):
            await repo.create(make_user("a@x.com"))


    @pytest.mark.asyncio
    async def test_delete_frees_email(self):
        repo = InMemoryUserRepository()
        user = await repo.create(make_user("a@x.com"))

        assert await repo.delete(user.id) is True
        assert await repo.delete(user.id) is False
        assert await repo.find_by_id(user.id) is None
        assert await repo.list_archived() == []
        await repo.create(make_user("a@x.com"))

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self):
        repo = InMemoryUserRepository()
        await repo.create(make_user("a@x.com"))

        assert await repo.search("_") == []
        assert await repo.search("%") == []
        assert len(await repo.search("smirnova anna")) == 1

class TestInMemoryInvitationRepository:
    @pytest.mark.asyncio
    async def test_consume_requires_pending_and_unexpired(self):
        repo = InMemoryInvitationRepository()
        live = await repo.save(make_invitation("live"))
        await repo.save(make_invitation("old", expires_in=timedelta(seconds=-1)))

        assert await repo.consume(InvitationToken("old"), utcnow()) is None
        consumed = await repo.consume(live.token, utcnow())
        assert consumed.status == InvitationStatus.CONSUMED
        assert await repo.consume(live.token, utcnow()) is None

    @pytest.mark.asyncio
    async def test_release_clears_consumption(self):
        repo = InMemoryInvitationRepository()
        invitation = await repo.save(make_invitation("tok"))
        await repo.consume(invitation.token, utcnow())
        await repo.mark_consumed_by(invitation.id, UserId(uuid4()))

        await repo.release(invitation.id)

        released = await repo.find_by_id(invitation.id)
        assert released.status == InvitationStatus.PENDING
        assert released.consumed_at is None
        assert released.consumed_by is None
