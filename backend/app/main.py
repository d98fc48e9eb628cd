"""
Runlog Backend - FastAPI Application
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, get_settings
from app.core.logging import setup_logging, get_logger
from app.api import calendar, events, recommendations, runs, stats
from app.services.store import ActivityStore, InMemoryActivityStore, load_snapshot

logger = get_logger(__name__)


def build_store(settings: Settings) -> ActivityStore:
    """Seed the activity store from the configured snapshot, if any."""
    if settings.ACTIVITY_SNAPSHOT_PATH:
        return load_snapshot(
            settings.ACTIVITY_SNAPSHOT_PATH,
            event_source_enabled=settings.EVENT_SOURCE_ENABLED,
        )
    logger.warning("No activity snapshot configured, starting with an empty store")
    return InMemoryActivityStore(event_source_enabled=settings.EVENT_SOURCE_ENABLED)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging(app.state.settings)
    logger.info("Starting Runlog Backend", version="1.0.0")

    yield

    # Shutdown
    logger.info("Shutting down Runlog Backend")


def create_app(
    store: Optional[ActivityStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application around an activity store."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Runlog API",
        description="Running statistics and training recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
    app.include_router(
        recommendations.router, prefix="/api/recommendations", tags=["recommendations"]
    )
    app.include_router(runs.router, prefix="/api/runs", tags=["runs"])
    app.include_router(events.router, prefix="/api/events", tags=["events"])
    app.include_router(calendar.router, prefix="/api/calendar", tags=["calendar"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "runlog-backend"}

    return app


app = create_app()
