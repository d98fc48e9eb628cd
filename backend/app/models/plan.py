"""
Recommended training plan.

Plans are derived on every request from recent history and never stored.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from app.models.stats import WeeklyBucket


class RunType(str, Enum):
    EASY = "easy"
    LONG = "long"
    TEMPO = "tempo"
    REST = "rest"
    EVENT = "event"


@dataclass(frozen=True)
class RecommendedRun:
    """One scheduled day. Rest days carry no distance or duration."""
    date: date
    run_type: RunType
    notes: str
    distance_km: Optional[float] = None
    duration_minutes: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "type": self.run_type.value,
            "distance": self.distance_km,
            "duration": self.duration_minutes,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class WeeklyPlan:
    week_start_date: date
    target_distance_km: float
    runs: List[RecommendedRun] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekStart": self.week_start_date.isoformat(),
            "targetDistance": self.target_distance_km,
            "runs": [run.to_dict() for run in self.runs],
        }


@dataclass(frozen=True)
class CurrentStats:
    """Recent-history figures the plan was derived from."""
    weekly_average_km: float
    runs_per_week: float
    last_weeks: List[WeeklyBucket] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weeklyAverage": self.weekly_average_km,
            "currentRunsPerWeek": self.runs_per_week,
            "last4Weeks": [bucket.to_dict() for bucket in self.last_weeks],
        }


@dataclass(frozen=True)
class RecommendationResponse:
    current_stats: CurrentStats
    recommendations: List[WeeklyPlan]
    rationale: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "currentStats": self.current_stats.to_dict(),
            "recommendations": [week.to_dict() for week in self.recommendations],
            "rationale": self.rationale,
        }
