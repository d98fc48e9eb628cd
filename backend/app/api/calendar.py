"""
Calendar API endpoints.
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

class CalendarEntryResponse(BaseModel):
    id: str
    date: str
    type: str = Field(..., description="run, event or recommendation")
    title: str
    distance_km: Optional[float] = None
    duration_minutes: Optional[int] = None
    notes: Optional[str] = None
    source: str


class CalendarEventsResponse(BaseModel):
    events: list[CalendarEntryResponse]


# ========================================
# API Endpoints
# ========================================

@router.get("/events", response_model=CalendarEventsResponse)
def get_calendar_events(
    startDate: Optional[date] = Query(None, description="First day of the window"),
    endDate: Optional[date] = Query(None, description="Last day of the window"),
    service: ActivityService = Depends(get_activity_service),
):
    """
    Past runs, event results and recommended runs for a date window,
    sorted by date.
    """
    try:
        entries = service.calendar_events(start_date=startDate, end_date=endDate)
    except ValueError as e:
        logger.warning("Calendar request rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Calendar error", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to build calendar")

    return {"events": [entry.to_dict() for entry in entries]}
