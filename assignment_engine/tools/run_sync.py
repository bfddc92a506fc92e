"""Sync the agent snapshot and optionally decide tickets from the command line.

Usage:
    python -m assignment_engine.tools.run_sync
    python -m assignment_engine.tools.run_sync --ticket 1042 --ticket 1043
    python -m assignment_engine.tools.run_sync --check-config engine_config.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import httpx

from assignment_engine.adapters.config_store.json_file_store import JsonFileConfigStore
from assignment_engine.adapters.memory.decision_log import InMemoryDecisionLog
from assignment_engine.adapters.memory.snapshot_repo import InMemoryAgentSnapshotRepository
from assignment_engine.adapters.upstream.rate_limit_state import RateLimitState
from assignment_engine.adapters.upstream.resilient_client import ResilientSyncClient
from assignment_engine.adapters.upstream.ticketing_adapter import HttpTicketingAdapter
from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.use_cases.decide_assignment import DecideAssignmentUseCase
from assignment_engine.application.use_cases.sync_snapshot import SyncSnapshotUseCase
from assignment_engine.config import settings
from assignment_engine.domain.exceptions import (
    ConfigInvalidError,
    TicketNotFoundError,
    UpstreamRateLimitedError,
    UpstreamUnavailableError,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def check_config(path: str) -> int:
    provider = EngineConfigProvider(JsonFileConfigStore(path))
    try:
        config = await provider.reload()
    except ConfigInvalidError as e:
        print(f"✗ {path}: {e}")
        for error in e.errors:
            print(f"    {error}")
        return 1

    print(f"✓ {path} is valid")
    print(f"    weights: {json.dumps(config.weights.as_dict())}")
    print(f"    thresholds: auto={config.thresholds.auto_assign} suggest={config.thresholds.suggest}")
    return 0


async def sync_and_decide(ticket_ids: list[str]) -> int:
    provider = EngineConfigProvider(JsonFileConfigStore(settings.engine_config_path))
    await provider.reload()

    snapshot = InMemoryAgentSnapshotRepository()
    async with httpx.AsyncClient(
        base_url=settings.ticketing_base_url,
        auth=(settings.ticketing_api_key, "X"),
        timeout=settings.ticketing_timeout,
    ) as client:
        resilient = ResilientSyncClient(RateLimitState(), retry=provider.current().retry)
        ticketing = HttpTicketingAdapter(client, resilient)

        result = await SyncSnapshotUseCase(ticketing, snapshot, provider).execute()
        print(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            return 1

        decide = DecideAssignmentUseCase(snapshot, InMemoryDecisionLog(), provider, ticketing=ticketing)
        for ticket_id in ticket_ids:
            try:
                decision = await decide.execute_by_id(ticket_id)
            except (TicketNotFoundError, UpstreamRateLimitedError, UpstreamUnavailableError) as e:
                logger.error("%s", e)
                continue
            outcome = decision.decision_type or decision.terminal_state
            print(f"{ticket_id}: {outcome.value} → {decision.chosen_agent_id or '-'} ({decision.reason})")

        status = resilient.rate_limit.status()
        print(f"Rate limit: {status.remaining}/{status.total} remaining, resets in {status.resets_in}s")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Sync agents and decide ticket assignments")
    parser.add_argument(
        "--ticket", action="append", default=[],
        help="Ticket id to decide after syncing (repeatable)",
    )
    parser.add_argument(
        "--check-config", type=str, metavar="PATH",
        help="Only validate an engine config file",
    )
    args = parser.parse_args()

    if args.check_config:
        sys.exit(asyncio.run(check_config(args.check_config)))
    sys.exit(asyncio.run(sync_and_decide(args.ticket)))


if __name__ == "__main__":
    main()
