"""Background outbox poller: runs the drain on a fixed interval.

One asyncio task per process. A cycle opens one session and one transaction,
claims a batch (FOR UPDATE SKIP LOCKED) and dispatches it through
DrainOutboxUseCase. The next cycle is scheduled only after the previous one
has settled, so cycles never overlap.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from caseflow.application.dtos.outbox import DrainResult
from caseflow.application.use_cases.outbox import DEFAULT_BATCH_SIZE, DrainOutboxUseCase
from caseflow.infrastructure.services.composition import build_drain_use_case
from caseflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 3.0

DrainFactory = Callable[[AsyncSession], DrainOutboxUseCase]


class OutboxPoller:
    """Periodic, non-overlapping outbox drain.

    Usage:
        poller = OutboxPoller(get_session_factory())
        poller.start()
        ...
        await poller.stop()

    or ``async with OutboxPoller(...) as poller:``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        batch_size: int = DEFAULT_BATCH_SIZE,
        shutdown_timeout_seconds: float = 10.0,
        drain_factory: DrainFactory | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._interval = interval_seconds
        self._batch_size = batch_size
        self._shutdown_timeout = shutdown_timeout_seconds
        self._drain_factory: DrainFactory = drain_factory or build_drain_use_case
        self._lock = asyncio.Lock()
        self._stopping = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Spawn the polling task (idempotent)."""
        if self.running:
            return
        self._stopping.clear()
        self._task = asyncio.create_task(self._run(), name="outbox-poller")
        logger.info(
            "Outbox poller started (interval=%.1fs, batch=%d)",
            self._interval,
            self._batch_size,
        )

    async def stop(self) -> None:
        """Stop polling; wait for the in-flight cycle, cancel it after the timeout."""
        self._stopping.set()
        task, self._task = self._task, None
        if task is None:
            return
        try:
            await asyncio.wait_for(asyncio.shield(task), self._shutdown_timeout)
        except TimeoutError:
            logger.warning(
                "Outbox drain still running after %.1fs; cancelling",
                self._shutdown_timeout,
            )
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("Outbox poller stopped")

    async def run_once(self) -> DrainResult | None:
        """Run one drain cycle; returns None when a cycle is already in progress.

        Commits on success. A cycle-level error rolls the whole batch back
        and propagates.
        """
        if self._lock.locked():
            logger.debug("Outbox drain already in progress; skipping cycle")
            return None
        async with self._lock:
            async with self._session_factory() as session:
                async with session.begin():
                    use_case = self._drain_factory(session)
                    return await use_case.drain(self._batch_size)

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.run_once()
            except Exception:
                logger.exception("Outbox drain cycle failed")
            try:
                await asyncio.wait_for(self._stopping.wait(), self._interval)
            except TimeoutError:
                pass

    async def __aenter__(self) -> OutboxPoller:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()
