"""Drain one batch of the outbox: dispatch each event and record the outcome."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import TYPE_CHECKING, Any

from caseflow.application.dtos.outbox import (
    DispatchResult,
    DrainResult,
    OutboxEventResult,
)
from caseflow.domain.entities.outbox import DomainEvent
from caseflow.shared.enums import DispatchOutcome
from caseflow.shared.telemetry.logging import get_logger
from caseflow.shared.telemetry.tracing import add_span_attributes, traced
from caseflow.shared.utils.datetime import utc_after, utc_now

if TYPE_CHECKING:
    from caseflow.application.interfaces.repositories import IOutboxRepository
    from caseflow.application.interfaces.services import IDomainEventHandler

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 50
MAX_ERROR_LENGTH = 2000

DispatchScope = Callable[[], AbstractAsyncContextManager[Any]]


def describe_error(exc: BaseException) -> str:
    """Error text stored in last_error (exception type and message, truncated)."""
    text = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
    return text[:MAX_ERROR_LENGTH]


def is_retryable(exc: BaseException) -> bool:
    """Domain errors declare retryable=False; anything else is assumed transient."""
    return bool(getattr(exc, "retryable", True))


class DrainOutboxUseCase:
    """Pulls the oldest unprocessed events and hands each to the event handler.

    One event's failure never stops the batch: the failure is recorded on the
    row (attempts + 1, last_error) and the next event is dispatched. Each
    dispatch runs inside dispatch_scope (a SAVEPOINT in production) so a
    failed dispatch leaves no partial writes behind.

    Failures are classified:
      - RETRY: the event stays unprocessed and is selected again later
        (after retry_backoff_seconds * 2**(attempts - 1) when backoff is on).
      - DEAD_LETTERED: the error is not retryable, or max_attempts is reached;
        the event is never selected again.
    """

    def __init__(
        self,
        outbox_repo: IOutboxRepository,
        event_handler: IDomainEventHandler,
        *,
        max_attempts: int | None = None,
        retry_backoff_seconds: float = 0.0,
        retry_backoff_max_seconds: float = 300.0,
        dispatch_scope: DispatchScope | None = None,
    ) -> None:
        self._outbox_repo = outbox_repo
        self._event_handler = event_handler
        self._max_attempts = max_attempts
        self._retry_backoff_seconds = retry_backoff_seconds
        self._retry_backoff_max_seconds = retry_backoff_max_seconds
        self._dispatch_scope: DispatchScope = dispatch_scope or nullcontext

    @traced("outbox.drain")
    async def drain(self, limit: int = DEFAULT_BATCH_SIZE) -> DrainResult:
        """Dispatch up to limit events in creation order; never raises for a single event."""
        events = await self._outbox_repo.list_unprocessed(limit, now=utc_now())
        results = []
        for event in events:
            results.append(await self.dispatch(event))
        result = DrainResult(tuple(results))
        add_span_attributes(
            **{
                "outbox.selected": result.selected,
                "outbox.processed": result.processed,
                "outbox.retrying": result.retrying,
                "outbox.dead_lettered": result.dead_lettered,
            }
        )
        if result.selected:
            logger.info(
                "Outbox drain: selected=%d processed=%d retrying=%d dead_lettered=%d",
                result.selected,
                result.processed,
                result.retrying,
                result.dead_lettered,
            )
        return result

    async def dispatch(self, event: OutboxEventResult) -> DispatchResult:
        """Dispatch one event and record success or failure on its row."""
        attempts = event.attempts + 1
        try:
            async with self._dispatch_scope():
                await self._event_handler.handle_domain_event(
                    DomainEvent(
                        topic=event.topic,
                        payload=event.payload,
                        tenant_id=event.tenant_id,
                    )
                )
        except Exception as exc:
            return await self._record_failure(event, attempts, exc)

        await self._outbox_repo.mark_processed(event.id)
        return DispatchResult(
            event_id=event.id, outcome=DispatchOutcome.PROCESSED, attempts=attempts
        )

    async def _record_failure(
        self, event: OutboxEventResult, attempts: int, exc: Exception
    ) -> DispatchResult:
        error = describe_error(exc)
        exhausted = self._max_attempts is not None and attempts >= self._max_attempts
        dead_letter = exhausted or not is_retryable(exc)
        next_attempt_at = None
        if not dead_letter and self._retry_backoff_seconds > 0:
            delay = min(
                self._retry_backoff_seconds * 2 ** (attempts - 1),
                self._retry_backoff_max_seconds,
            )
            next_attempt_at = utc_after(delay)

        await self._outbox_repo.mark_failed(
            event.id,
            error,
            next_attempt_at=next_attempt_at,
            dead_letter=dead_letter,
        )
        if dead_letter:
            logger.error(
                "Outbox event %s (%s) dead-lettered after %d attempt(s): %s",
                event.id,
                event.topic,
                attempts,
                error,
            )
            outcome = DispatchOutcome.DEAD_LETTERED
        else:
            logger.warning(
                "Outbox event %s (%s) failed on attempt %d, will retry: %s",
                event.id,
                event.topic,
                attempts,
                error,
            )
            outcome = DispatchOutcome.RETRY
        return DispatchResult(
            event_id=event.id, outcome=outcome, attempts=attempts, error=error
        )
