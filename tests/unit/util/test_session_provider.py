"""Unit tests for the request-scoped database session."""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from picket.config import Settings
from picket.util.di.infrastructure import ProdPersistenceProvider


class RecordingSession:
    def __init__(self, calls: list[str]):
        self.calls = calls

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.calls.append("close")

    async def commit(self):
        self.calls.append("commit")

    async def rollback(self):
        self.calls.append("rollback")


class RecordingSessionProvider(Provider):
    def __init__(self, calls: list[str]):
        super().__init__()
        self.calls = calls

    @provide(scope=Scope.APP)
    def settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: RecordingSession(self.calls)


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def container(calls):
    return make_async_container(
        ProdPersistenceProvider(), RecordingSessionProvider(calls)
    )


class TestRequestSession:
    @pytest.mark.asyncio
    async def test_clean_exit_commits(self, container, calls):
        async with container() as request:
            await request.get(AsyncSession)
        await container.close()

        assert calls == ["commit", "close"]

    @pytest.mark.asyncio
    async def test_error_in_scope_rolls_back(self, container, calls):
        with pytest.raises(RuntimeError):
            async with container() as request:
                await request.get(AsyncSession)
                raise RuntimeError("insert failed")
        await container.close()

        assert calls == ["rollback", "close"]
        assert "commit" not in calls
