"""
Recommendation module - Weekly training plan generation from recent history.
"""
from app.services.recommendation.scheduler import (
    RecommendationScheduler,
    SchedulerConfig,
    generate_schedule,
    validate_request,
)

__all__ = [
    "RecommendationScheduler",
    "SchedulerConfig",
    "generate_schedule",
    "validate_request",
]
