"""Unit tests for PeriodicTask."""

from unittest.mock import AsyncMock

import pytest

from src.dashboard.timers import PeriodicTask
from tests.fixtures.clock import FakeSleep, settle


class TestPeriodicTask:
    """Test suite for PeriodicTask."""

    @pytest.mark.asyncio
    async def test_runs_after_each_interval(self) -> None:
        """Test callback runs once per elapsed interval."""
        callback = AsyncMock()
        sleep = FakeSleep(ticks=3)
        task = PeriodicTask("refresh", 1800, callback, sleep)

        task.start()
        await settle()

        assert callback.await_count == 3
        assert task.runs == 3
        assert sleep.calls[:3] == [1800, 1800, 1800]
        assert task.is_running is True
        task.cancel()

    @pytest.mark.asyncio
    async def test_does_not_run_before_first_interval(self) -> None:
        """Test no callback before the first interval elapses."""
        callback = AsyncMock()
        task = PeriodicTask("refresh", 1800, callback, FakeSleep(ticks=0))

        task.start()
        await settle()

        callback.assert_not_awaited()
        task.cancel()

    @pytest.mark.asyncio
    async def test_run_immediately(self) -> None:
        """Test run_immediately runs once before sleeping."""
        callback = AsyncMock()
        task = PeriodicTask("alerts", 900, callback, FakeSleep(ticks=0))

        task.start(run_immediately=True)
        await settle()

        callback.assert_awaited_once()
        task.cancel()

    @pytest.mark.asyncio
    async def test_callback_failure_keeps_timer_armed(self) -> None:
        """Test exceptions in the callback do not stop the timer."""
        callback = AsyncMock(side_effect=RuntimeError("provider down"))
        sleep = FakeSleep(ticks=2)
        task = PeriodicTask("refresh", 60, callback, sleep)

        task.start()
        await settle()

        assert callback.await_count == 2
        assert task.is_running is True

        sleep.allow()
        await settle()

        assert callback.await_count == 3
        task.cancel()

    @pytest.mark.asyncio
    async def test_cancel_stops_runs(self) -> None:
        """Test cancelled timers stop running."""
        callback = AsyncMock()
        sleep = FakeSleep(ticks=0)
        task = PeriodicTask("refresh", 60, callback, sleep)

        task.start()
        await settle()
        task.cancel()
        sleep.allow(5)
        await settle()

        assert task.is_running is False
        callback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_restart_replaces_running_task(self) -> None:
        """Test start while armed restarts the interval."""
        callback = AsyncMock()
        sleep = FakeSleep(ticks=0)
        task = PeriodicTask("refresh", 60, callback, sleep)

        task.start()
        first = task._task
        task.start()
        await settle()

        assert first is not None and first.cancelled()
        assert task._task is not first
        assert task.is_running is True
        task.cancel()

    def test_cancel_when_not_armed(self) -> None:
        """Test cancel is a no-op when not armed."""
        task = PeriodicTask("refresh", 60, AsyncMock())

        task.cancel()

        assert task.is_running is False

    def test_start_requires_running_loop(self) -> None:
        """Test start outside an event loop raises."""
        task = PeriodicTask("refresh", 60, AsyncMock())

        with pytest.raises(RuntimeError):
            task.start()
