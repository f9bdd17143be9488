"""OutboxPoller tests: cycles never overlap and stop() ends polling."""

import asyncio

import pytest

from caseflow.application.dtos.outbox import DrainResult
from caseflow.infrastructure.services.outbox_poller import OutboxPoller


class BlockingDrain:
    """Fake drain use case; waits on release before returning."""

    def __init__(self) -> None:
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def drain(self, limit: int) -> DrainResult:
        self.calls += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        self.started.set()
        try:
            await self.release.wait()
        finally:
            self.active -= 1
        return DrainResult()


@pytest.mark.requires_db
async def test_run_once_skips_when_cycle_in_progress(session_factory) -> None:
    drain = BlockingDrain()
    poller = OutboxPoller(session_factory, drain_factory=lambda _session: drain)

    first = asyncio.create_task(poller.run_once())
    await drain.started.wait()
    assert await poller.run_once() is None

    drain.release.set()
    assert isinstance(await first, DrainResult)
    assert drain.calls == 1
    assert drain.max_active == 1


@pytest.mark.requires_db
async def test_stop_waits_for_inflight_drain_and_prevents_new_cycles(session_factory) -> None:
    drain = BlockingDrain()
    poller = OutboxPoller(
        session_factory,
        interval_seconds=0.01,
        drain_factory=lambda _session: drain,
    )
    poller.start()
    await drain.started.wait()

    stop = asyncio.create_task(poller.stop())
    await asyncio.sleep(0.05)
    assert not stop.done()
    drain.release.set()
    await stop

    calls = drain.calls
    await asyncio.sleep(0.05)
    assert drain.calls == calls == 1
    assert not poller.running


@pytest.mark.requires_db
async def test_stop_cancels_drain_after_timeout(session_factory) -> None:
    drain = BlockingDrain()
    poller = OutboxPoller(
        session_factory,
        shutdown_timeout_seconds=0.05,
        drain_factory=lambda _session: drain,
    )
    poller.start()
    await drain.started.wait()

    await poller.stop()

    assert drain.active == 0
    assert not poller.running


@pytest.mark.requires_db
async def test_loop_survives_cycle_errors(session_factory) -> None:
    calls = 0

    class FailingDrain:
        async def drain(self, limit: int) -> DrainResult:
            nonlocal calls
            calls += 1
            raise RuntimeError("store unavailable")

    async with OutboxPoller(
        session_factory, interval_seconds=0.01, drain_factory=lambda _s: FailingDrain()
    ):
        for _ in range(100):
            if calls >= 2:
                break
            await asyncio.sleep(0.01)

    assert calls >= 2
