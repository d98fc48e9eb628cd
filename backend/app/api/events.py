"""
Weekly timed event API endpoints.
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

class EventResultResponse(BaseModel):
    id: str
    event_date: str
    finish_time: str
    finish_seconds: int
    position: Optional[int] = None
    total_runners: Optional[int] = None
    distance: float = Field(..., description="Metres")


class EventResultListResponse(BaseModel):
    results: list[EventResultResponse]
    total: int
    limit: int
    offset: int


# ========================================
# API Endpoints
# ========================================

@router.get("/results", response_model=EventResultListResponse)
def list_event_results(
    startDate: Optional[date] = Query(None, description="First event date to include"),
    endDate: Optional[date] = Query(None, description="Last event date to include"),
    limit: int = Query(100, description="Page size (1-1000)"),
    offset: int = Query(0, description="Results to skip"),
    service: ActivityService = Depends(get_activity_service),
):
    """
    Event results, oldest first. Results are listed whether or not the
    event source is enabled for statistics.
    """
    try:
        page = service.list_event_results(
            start_date=startDate, end_date=endDate, limit=limit, offset=offset
        )
    except ValueError as e:
        logger.warning("Event result listing rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return page.to_dict()
