"""Unit tests for AccessService (authentication and role gates)."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from picket.domain.error import ForbiddenError, NotAuthenticatedError
from picket.domain.model import User
from picket.domain.repository import UserRepository
from picket.domain.service import AccessService, Identity, JWTService
from picket.domain.value import Email, Role, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def store_user(unit_env, role: Role) -> User:
    repo = await unit_env.get(UserRepository)
    return await repo.create(
        User(
            id=UserId(uuid4()),
            name="Anna",
            surname="Smirnova",
            patronymic="Olegovna",
            email=Email(f"{uuid4().hex}@x.com"),
            password_hash="x",
            role=role,
        )
    )


class FailingUserRepository:
    async def find_by_id(self, user_id):
        raise ConnectionError("database unavailable")


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_token_yields_identity(self, unit_env):
        access = await unit_env.get(AccessService)
        jwt_service = await unit_env.get(JWTService)
        user_id = uuid4()

        identity = access.authenticate(jwt_service.create_token(str(user_id)))

        assert identity.user_id == user_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "garbage"])
    async def test_missing_or_malformed_token(self, unit_env, token):
        access = await unit_env.get(AccessService)

        with pytest.raises(NotAuthenticatedError):
            access.authenticate(token)

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env):
        access = await unit_env.get(AccessService)
        jwt_service = await unit_env.get(JWTService)
        token = jwt_service.create_token(
            str(uuid4()), issued_at=datetime.now(timezone.utc) - timedelta(days=6)
        )

        with pytest.raises(NotAuthenticatedError):
            access.authenticate(token)

    @pytest.mark.asyncio
    async def test_non_uuid_subject(self, unit_env):
        access = await unit_env.get(AccessService)
        jwt_service = await unit_env.get(JWTService)

        with pytest.raises(NotAuthenticatedError):
            access.authenticate(jwt_service.create_token("not-a-uuid"))


class TestAuthorize:
    @pytest.mark.asyncio
    async def test_permitted_role_passes(self, unit_env):
        access = await unit_env.get(AccessService)
        admin = await store_user(unit_env, Role.ADMIN)

        user = await access.authorize(
            Identity(user_id=admin.id), frozenset({Role.ADMIN})
        )

        assert user.id == admin.id

    @pytest.mark.asyncio
    async def test_other_role_is_forbidden(self, unit_env):
        access = await unit_env.get(AccessService)
        member = await store_user(unit_env, Role.MEMBER)

        with pytest.raises(ForbiddenError):
            await access.authorize(Identity(user_id=member.id), frozenset({Role.ADMIN}))

    @pytest.mark.asyncio
    async def test_unknown_user_fails_closed(self, unit_env):
        access = await unit_env.get(AccessService)

        with pytest.raises(NotAuthenticatedError):
            await access.authorize(
                Identity(user_id=UserId(uuid4())), frozenset(Role)
            )

    @pytest.mark.asyncio
    async def test_store_error_fails_closed(self, unit_env):
        jwt_service = await unit_env.get(JWTService)
        access = AccessService(jwt_service, FailingUserRepository())

        with pytest.raises(NotAuthenticatedError):
            await access.authorize(
                Identity(user_id=UserId(uuid4())), frozenset(Role)
            )

    @pytest.mark.asyncio
    async def test_role_is_read_fresh_on_every_check(self, unit_env):
        access = await unit_env.get(AccessService)
        repo = await unit_env.get(UserRepository)
        admin = await store_user(unit_env, Role.ADMIN)
        identity = Identity(user_id=admin.id)
        await access.authorize(identity, frozenset({Role.ADMIN}))

        await repo.update(admin.model_copy(update={"role": Role.MEMBER}))

        with pytest.raises(ForbiddenError):
            await access.authorize(identity, frozenset({Role.ADMIN}))
