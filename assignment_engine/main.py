"""Ticket Assignment Engine — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assignment_engine.config import settings
from assignment_engine.infrastructure.api.dependencies import (
    close_upstream,
    get_config_provider,
    get_snapshot_repo,
    get_ticketing,
)
from assignment_engine.application.use_cases.sync_snapshot import SyncSnapshotUseCase
from assignment_engine.infrastructure.api.routes_admin import router as admin_router
from assignment_engine.infrastructure.api.routes_decisions import router as decisions_router
from assignment_engine.infrastructure.api.routes_health import router as health_router
from assignment_engine.infrastructure.api.routes_scoring import router as scoring_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    config_provider = get_config_provider()
    # Invalid engine config at startup is fatal
    await config_provider.reload()

    if settings.sync_on_startup:
        sync = SyncSnapshotUseCase(get_ticketing(), get_snapshot_repo(), config_provider)
        result = await sync.execute()
        if not result.ok:
            logger.warning("Initial sync failed; decisions will be flagged stale: %s", result.error)
    yield
    await close_upstream()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Ticket Assignment Engine",
        description="Eligibility, scoring and auto-assignment decisions for support tickets",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(decisions_router, prefix="/api")
    app.include_router(scoring_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    return app


app = create_app()
