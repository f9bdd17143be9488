"""DTOs for the outbox and drain results."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from caseflow.shared.enums import DispatchOutcome


@dataclass(frozen=True)
class OutboxEventResult:
    """Single outbox row (read-model)."""

    id: str
    tenant_id: str | None
    topic: str
    payload: dict[str, Any] | None
    created_at: datetime
    processed_at: datetime | None
    attempts: int
    last_error: str | None
    available_at: datetime | None = None
    dead_lettered_at: datetime | None = None


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one dispatch attempt for one outbox event."""

    event_id: str
    outcome: DispatchOutcome
    attempts: int
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is DispatchOutcome.PROCESSED


@dataclass(frozen=True)
class DrainResult:
    """Summary of one drain cycle, one DispatchResult per selected event (in order)."""

    results: tuple[DispatchResult, ...] = ()

    @property
    def selected(self) -> int:
        return len(self.results)

    @property
    def processed(self) -> int:
        return sum(1 for r in self.results if r.outcome is DispatchOutcome.PROCESSED)

    @property
    def retrying(self) -> int:
        return sum(1 for r in self.results if r.outcome is DispatchOutcome.RETRY)

    @property
    def dead_lettered(self) -> int:
        return sum(
            1 for r in self.results if r.outcome is DispatchOutcome.DEAD_LETTERED
        )
