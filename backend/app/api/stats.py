"""
Statistics API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.api.deps import get_stats_service
from app.core.logging import get_logger
from app.services.stats_service import StatsService

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Response Schemas
# ========================================

class SummaryResponse(BaseModel):
    """Totals and averages over the selected window."""
    total_count: int
    total_distance_m: float
    total_duration_s: float
    average_distance_m: float
    average_pace_s_per_km: float
    average_pace: str
    average_speed_kmh: float
    longest_distance_m: float
    most_frequent_weekday: Optional[str] = None


class TrendPointResponse(BaseModel):
    period_start: str = Field(..., description="First day of the period (YYYY-MM-DD)")
    period_label: str
    avg_pace_seconds: float
    avg_pace: str
    run_count: int


class ProgressResponse(BaseModel):
    period: str
    data: list[TrendPointResponse]


class ConsistencyResponse(BaseModel):
    period_days: int
    runs_in_period: int
    current_streak: int
    longest_streak: int
    avg_runs_per_week: float
    days_since_last_run: int


class LocationResponse(BaseModel):
    lat: float
    lon: float
    label: str
    run_count: int
    total_distance: float = Field(..., description="Metres")
    avg_distance: float = Field(..., description="Metres")


class LocationsResponse(BaseModel):
    locations: list[LocationResponse]


class RecordResponse(BaseModel):
    """A best effort. Timed records also carry a formatted time."""
    value: float
    date: str
    activity_id: str
    time: Optional[str] = None


class PersonalRecordsResponse(BaseModel):
    longest_distance: Optional[RecordResponse] = None
    fastest_5k: Optional[RecordResponse] = None
    fastest_10k: Optional[RecordResponse] = None
    most_elevation: Optional[RecordResponse] = None


class PredictionResponse(BaseModel):
    predicted_seconds: int
    predicted_time: str
    confidence: str
    sample_size: int


class WeeklyDistancePointResponse(BaseModel):
    week_start: str
    week: str
    distance: float = Field(..., description="Kilometres")


class WeeklyDistanceResponse(BaseModel):
    period: str
    data: list[WeeklyDistancePointResponse]


def _bad_request(error: ValueError) -> HTTPException:
    logger.warning("Rejected stats request", error=str(error))
    return HTTPException(status_code=400, detail=str(error))


# ========================================
# API Endpoints
# ========================================

@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    days: Optional[int] = Query(None, description="Lookback window in days"),
    service: StatsService = Depends(get_stats_service),
):
    """
    Overall totals and averages, including weekly event results when the
    event source is enabled.
    """
    try:
        return service.get_summary(lookback_days=days).to_dict()
    except ValueError as e:
        raise _bad_request(e)


@router.get("/progress", response_model=ProgressResponse)
def get_pace_progress(
    period: str = Query("weekly", description="weekly or monthly"),
    service: StatsService = Depends(get_stats_service),
):
    """Average pace per week or month, oldest first."""
    try:
        points = service.get_pace_trend(period)
    except ValueError as e:
        raise _bad_request(e)
    return {"period": period, "data": [point.to_dict() for point in points]}


@router.get("/by-location", response_model=LocationsResponse)
def get_by_location(
    precision: int = Query(4, description="Decimal places of start coordinates"),
    service: StatsService = Depends(get_stats_service),
):
    """Activities grouped by rounded start location."""
    try:
        clusters = service.get_location_clusters(precision_digits=precision)
    except ValueError as e:
        raise _bad_request(e)
    return {"locations": [cluster.to_dict() for cluster in clusters]}


@router.get("/consistency", response_model=ConsistencyResponse)
def get_consistency(
    days: Optional[int] = Query(None, description="Lookback window in days"),
    service: StatsService = Depends(get_stats_service),
):
    """Streaks and training frequency."""
    try:
        return service.get_consistency(lookback_days=days).to_dict()
    except ValueError as e:
        raise _bad_request(e)


@router.get("/personal-records", response_model=PersonalRecordsResponse)
def get_personal_records(
    service: StatsService = Depends(get_stats_service),
):
    """Longest run, fastest 5K/10K and most elevation."""
    return service.get_personal_records().to_dict()


@router.get("/predict-5k", response_model=PredictionResponse)
def predict_5k(
    service: StatsService = Depends(get_stats_service),
):
    """5K time predicted from recent runs of at least 4 km."""
    prediction = service.predict_short_distance()
    if prediction is None:
        raise HTTPException(
            status_code=404,
            detail="Not enough recent run data to predict 5K time",
        )
    return prediction.to_dict()


@router.get("/weekly-distance", response_model=WeeklyDistanceResponse)
def get_weekly_distance(
    weeks: Optional[int] = Query(None, description="Number of weeks to include"),
    service: StatsService = Depends(get_stats_service),
):
    """Distance per week, zero-filled, oldest first."""
    try:
        points = service.get_weekly_distance(weeks=weeks)
    except ValueError as e:
        raise _bad_request(e)
    return {"period": "weekly", "data": [point.to_dict() for point in points]}
