"""
FastAPI dependencies.

Settings and the store are attached to the application by create_app;
tests can also replace these dependencies through app.dependency_overrides.
"""
from fastapi import Depends, Request

from app.core.config import Settings
from app.services.activity_service import ActivityService
from app.services.stats_service import StatsService
from app.services.store import ActivityStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ActivityStore:
    """Activity store attached to the running application."""
    return request.app.state.store


def get_stats_service(
    store: ActivityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> StatsService:
    return StatsService(store, settings)


def get_activity_service(
    store: ActivityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> ActivityService:
    return ActivityService(store, settings)
