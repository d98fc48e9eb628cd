"""
Pace Predictor - Estimate a 5K time from recent longer efforts.
"""
from typing import Iterable, Optional

from app.core.logging import get_logger
from app.core.numbers import round_int
from app.models.activity import Activity, format_duration
from app.models.stats import Prediction
from app.services.analytics.calendar import mean

logger = get_logger(__name__)

RECENT_LIMIT = 20
MIN_DISTANCE_M = 4000
HIGH_CONFIDENCE_SAMPLES = 10
MEDIUM_CONFIDENCE_SAMPLES = 5


def confidence_for(samples: int) -> str:
    if samples >= HIGH_CONFIDENCE_SAMPLES:
        return "high"
    if samples >= MEDIUM_CONFIDENCE_SAMPLES:
        return "medium"
    return "low"


def predict_5k(activities: Iterable[Activity]) -> Optional[Prediction]:
    """
    Predict a 5K time.

    Takes the 20 most recent activities, keeps those of at least 4 km with
    a defined pace, and extrapolates their mean pace to 5 km.

    Returns:
        Prediction, or None when no recent activity qualifies
    """
    recent = sorted(activities, key=lambda a: a.occurred_at, reverse=True)[:RECENT_LIMIT]
    paces = [
        a.pace_seconds_per_km for a in recent
        if a.distance_meters >= MIN_DISTANCE_M and a.has_pace
    ]

    if not paces:
        logger.debug("Not enough recent data for 5K prediction", recent=len(recent))
        return None

    predicted = mean(paces) * 5
    return Prediction(
        predicted_seconds=round_int(predicted),
        predicted_time=format_duration(predicted),
        confidence=confidence_for(len(paces)),
        sample_size=len(paces),
    )
