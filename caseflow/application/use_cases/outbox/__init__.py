from caseflow.application.use_cases.outbox.drain_outbox import (
    DEFAULT_BATCH_SIZE,
    DrainOutboxUseCase,
    describe_error,
    is_retryable,
)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DrainOutboxUseCase",
    "describe_error",
    "is_retryable",
]
