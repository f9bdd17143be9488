"""Drain the outbox once, or keep polling until interrupted.

Usage:
    uv run python -m scripts.drain_outbox           # one cycle, then exit
    uv run python -m scripts.drain_outbox --loop    # poll every OUTBOX_POLL_INTERVAL_SECONDS

Use this to run the drain outside the API process (OUTBOX_POLLER_ENABLED=false
on the API). Concurrent drains are safe: batches are claimed with SKIP LOCKED.
Requires: DATABASE_URL.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def main(loop: bool) -> None:
    _load_env()
    from caseflow.core.config import get_settings
    from caseflow.infrastructure.persistence import database
    from caseflow.infrastructure.services.outbox_poller import OutboxPoller
    from caseflow.shared.telemetry.logging import setup_logging

    get_settings.cache_clear()
    settings = get_settings()
    setup_logging()
    if not settings.database_url:
        print("DATABASE_URL is not set", file=sys.stderr)
        sys.exit(1)

    poller = OutboxPoller(
        database.get_session_factory(),
        interval_seconds=settings.outbox_poll_interval_seconds,
        batch_size=settings.outbox_batch_size,
        shutdown_timeout_seconds=settings.outbox_shutdown_timeout_seconds,
    )
    try:
        if loop:
            async with poller:
                await asyncio.Event().wait()
        else:
            result = await poller.run_once()
            if result is not None:
                print(
                    f"Selected {result.selected}: processed={result.processed} "
                    f"retrying={result.retrying} dead_lettered={result.dead_lettered}"
                )
    finally:
        await database.dispose_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Drain the caseflow outbox.")
    parser.add_argument(
        "--loop", action="store_true", help="keep polling until interrupted"
    )
    args = parser.parse_args()
    try:
        asyncio.run(main(args.loop))
    except KeyboardInterrupt:
        pass
