"""Unit tests for BackgroundDispatcher."""

import asyncio

import pytest

from picket.util.tasks import BackgroundDispatcher


class TestBackgroundDispatcher:
    @pytest.mark.asyncio
    async def test_drain_waits_for_spawned_tasks(self):
        dispatcher = BackgroundDispatcher()
        done = []

        async def work():
            await asyncio.sleep(0)
            done.append(True)

        dispatcher.spawn(work(), name="work")
        assert dispatcher.pending == 1

        await dispatcher.drain()

        assert done == [True]
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_failing_task_does_not_propagate(self):
        dispatcher = BackgroundDispatcher()

        async def boom():
            raise RuntimeError("delivery exploded")

        task = dispatcher.spawn(boom(), name="boom")
        await dispatcher.drain()

        assert task.done()
        assert isinstance(task.exception(), RuntimeError)
        assert dispatcher.pending == 0
