"""
Runs API endpoints.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.api.deps import get_activity_service
from app.core.logging import get_logger
from app.services.activity_service import ActivityService

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Response Schemas
# ========================================

class RunResponse(BaseModel):
    """A single stored run."""
    id: str
    name: str
    kind: str
    start_date_local: str
    distance: float = Field(..., description="Metres")
    moving_time: float = Field(..., description="Seconds")
    total_elevation_gain: Optional[float] = None
    latitude_start: Optional[float] = None
    longitude_start: Optional[float] = None
    pace_seconds_per_km: Optional[float] = None
    average_pace: Optional[str] = None


class RunListResponse(BaseModel):
    runs: list[RunResponse]
    total: int
    limit: int
    offset: int
    has_more: bool


# ========================================
# API Endpoints
# ========================================

@router.get("", response_model=RunListResponse)
def list_runs(
    startDate: Optional[date] = Query(None, description="First day to include (YYYY-MM-DD)"),
    endDate: Optional[date] = Query(None, description="Last day to include (YYYY-MM-DD)"),
    limit: int = Query(100, description="Page size (1-1000)"),
    offset: int = Query(0, description="Runs to skip"),
    sortBy: str = Query("start_date", description="start_date, distance or moving_time"),
    sortOrder: str = Query("desc", description="asc or desc"),
    service: ActivityService = Depends(get_activity_service),
):
    """
    List runs with optional date filtering and pagination.
    """
    try:
        page = service.list_runs(
            start_date=startDate,
            end_date=endDate,
            limit=limit,
            offset=offset,
            sort_by=sortBy,
            sort_order=sortOrder,
        )
    except ValueError as e:
        logger.warning("Run listing rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return page.to_dict()


@router.get("/{run_id}", response_model=RunResponse)
def get_run(
    run_id: str,
    service: ActivityService = Depends(get_activity_service),
):
    """Get a specific run by ID."""
    run = service.get_run(run_id)
    if run is None:
        raise HTTPException(status_code=404, detail="Run not found")
    return run.to_dict()
