"""Operational endpoints — snapshot sync and engine config reload."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from assignment_engine.application.config_provider import EngineConfigProvider
from assignment_engine.application.use_cases.sync_snapshot import SyncSnapshotUseCase
from assignment_engine.domain.exceptions import ConfigInvalidError
from assignment_engine.infrastructure.api.dependencies import get_config_provider, get_sync_uc

router = APIRouter(tags=["admin"])


@router.post("/sync")
async def sync_snapshot(use_case: SyncSnapshotUseCase = Depends(get_sync_uc)):
    """Refresh agents and open tickets from the ticketing system.

    A failed sync still answers 200; ``ok`` is false and the previous snapshot
    stays in use.
    """
    result = await use_case.execute()
    return result.to_dict()


@router.post("/config/reload")
async def reload_config(config_provider: EngineConfigProvider = Depends(get_config_provider)):
    try:
        config = await config_provider.reload()
    except ConfigInvalidError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "errors": e.errors, "kept_previous": True},
        )

    return {
        "status": "reloaded",
        "weights": config.weights.as_dict(),
        "thresholds": {
            "auto_assign": config.thresholds.auto_assign,
            "suggest": config.thresholds.suggest,
        },
        "auto_assign_enabled": config.auto_assign_enabled,
        "freshness_window_seconds": config.freshness_window_seconds,
    }
