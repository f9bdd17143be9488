"""Settings defaults and outbox tuning validation."""

import pytest
from pydantic import ValidationError

from caseflow.core.config import Settings


def test_outbox_defaults() -> None:
    settings = Settings(database_url="")
    assert settings.outbox_poll_interval_seconds == 3.0
    assert settings.outbox_batch_size == 50
    assert settings.outbox_max_attempts is None
    assert settings.outbox_retry_backoff_seconds == 0.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"outbox_poll_interval_seconds": 0},
        {"outbox_batch_size": 0},
        {"outbox_max_attempts": 0},
        {"outbox_retry_backoff_seconds": -1},
        {"outbox_retry_backoff_seconds": 10, "outbox_retry_backoff_max_seconds": 5},
    ],
)
def test_invalid_outbox_settings_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        Settings(database_url="", **overrides)
