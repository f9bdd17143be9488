"""Domain event shape consumed from the outbox.

Business modules append rows to the outbox inside their own transactions;
the drain loop hands each row to the trigger matcher as a DomainEvent.
"""

from dataclasses import dataclass, field
from typing import Any

SUBJECT_SCHEMA_KEY = "subjectSchema"
SUBJECT_MODEL_KEY = "subjectModel"
SUBJECT_ID_KEY = "subjectId"


@dataclass(frozen=True)
class SubjectRef:
    """Business entity coordinates (schema/model/id) carried in an event payload."""

    schema: str | None
    model: str | None
    id: str | None

    @property
    def is_matchable(self) -> bool:
        """Triggers key on schema and model; without both nothing can match."""
        return bool(self.schema) and bool(self.model)


@dataclass(frozen=True)
class DomainEvent:
    """One domain event: optional tenant scope, topic (event key), payload."""

    topic: str
    payload: dict[str, Any] | None = field(default=None)
    tenant_id: str | None = None

    def subject(self) -> SubjectRef:
        """Extract subject coordinates; missing keys or a non-dict payload yield None fields."""
        payload = self.payload if isinstance(self.payload, dict) else {}
        return SubjectRef(
            schema=payload.get(SUBJECT_SCHEMA_KEY),
            model=payload.get(SUBJECT_MODEL_KEY),
            id=payload.get(SUBJECT_ID_KEY),
        )
