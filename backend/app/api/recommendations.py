"""
Recommendations API endpoints.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field

from app.api.deps import get_stats_service
from app.core.logging import get_logger
from app.services.recommendation import validate_request
from app.services.stats_service import StatsService

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Response Schemas
# ========================================

class RecommendedRunResponse(BaseModel):
    """One planned day. Rest days have no distance or duration."""
    date: str
    type: str = Field(..., description="easy, long, tempo, rest or event")
    distance: Optional[float] = Field(None, description="Kilometres")
    duration: Optional[int] = Field(None, description="Minutes")
    notes: str


class WeeklyPlanResponse(BaseModel):
    weekStart: str
    targetDistance: float
    runs: list[RecommendedRunResponse]


class WeeklyBucketResponse(BaseModel):
    week: str
    distance: float
    runs: int


class CurrentStatsResponse(BaseModel):
    weeklyAverage: float
    currentRunsPerWeek: float
    last4Weeks: list[WeeklyBucketResponse]


class RecommendationsResponse(BaseModel):
    """Training plan with the history figures it was derived from."""
    currentStats: CurrentStatsResponse
    recommendations: list[WeeklyPlanResponse]
    rationale: str


# ========================================
# API Endpoints
# ========================================

@router.get("", response_model=RecommendationsResponse)
def get_recommendations(
    weeks: int = Query(4, description="Number of weeks to plan (1-12)"),
    goalDistance: Optional[float] = Query(
        None, description="Target weekly distance in km (5-200)"
    ),
    service: StatsService = Depends(get_stats_service),
):
    """
    Weekly run recommendations based on recent training history.
    """
    logger.info("Generating recommendations", weeks=weeks, goal_distance=goalDistance)

    try:
        response = service.generate_schedule(weeks_ahead=weeks, goal_weekly_km=goalDistance)
    except ValueError as e:
        logger.warning("Recommendation request rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Recommendations error", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate recommendations")

    return response.to_dict()


@router.get("/calendar.ics")
def export_recommendations(
    weeks: int = Query(4, description="Number of weeks to plan (1-12)"),
    goalDistance: Optional[float] = Query(None, description="Target weekly distance in km"),
    service: StatsService = Depends(get_stats_service),
) -> Response:
    """
    Export the recommended plan as an iCal file.
    """
    try:
        validate_request(weeks, goalDistance)
    except ValueError as e:
        logger.warning("Calendar export rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    try:
        content = service.export_schedule_ical(weeks_ahead=weeks, goal_weekly_km=goalDistance)
    except Exception as e:
        logger.error("Calendar export error", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to export recommendations")

    filename = service.export.get_ical_filename(date.today())

    return Response(
        content=content,
        media_type=service.export.get_ical_content_type(),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
