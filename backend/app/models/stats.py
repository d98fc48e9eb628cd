"""
Derived statistics.

None of these are persisted: each is computed fresh from an activity
snapshot and converted to a dict for the API response.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from app.core.numbers import round_half_up
from app.models.activity import Weekday, format_duration


@dataclass(frozen=True)
class Summary:
    """Totals and averages over a set of activities."""
    total_count: int = 0
    total_distance_m: float = 0.0
    total_duration_s: float = 0.0
    average_distance_m: float = 0.0
    average_pace_s_per_km: float = 0.0
    average_speed_kmh: float = 0.0
    longest_distance_m: float = 0.0
    most_frequent_weekday: Optional[Weekday] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "total_count": self.total_count,
            "total_distance_m": self.total_distance_m,
            "total_duration_s": self.total_duration_s,
            "average_distance_m": self.average_distance_m,
            "average_pace_s_per_km": self.average_pace_s_per_km,
            "average_pace": format_duration(self.average_pace_s_per_km),
            "average_speed_kmh": self.average_speed_kmh,
            "longest_distance_m": self.longest_distance_m,
            "most_frequent_weekday": (
                self.most_frequent_weekday.label
                if self.most_frequent_weekday is not None else None
            ),
        }


@dataclass(frozen=True)
class WeeklyBucket:
    """Activities aggregated into one Monday-start calendar week."""
    week_start_date: date
    total_distance_km: float
    activity_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week": self.week_start_date.isoformat(),
            "distance": round_half_up(self.total_distance_km, 1),
            "runs": self.activity_count,
        }


@dataclass(frozen=True)
class WeeklyDistancePoint:
    week_start_date: date
    label: str
    distance_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_start": self.week_start_date.isoformat(),
            "week": self.label,
            "distance": self.distance_km,
        }


@dataclass(frozen=True)
class TrendPoint:
    """Average pace of one calendar period."""
    period_start: date
    label: str
    average_pace_s_per_km: float
    activity_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period_start": self.period_start.isoformat(),
            "period_label": self.label,
            "avg_pace_seconds": self.average_pace_s_per_km,
            "avg_pace": format_duration(self.average_pace_s_per_km),
            "run_count": self.activity_count,
        }


@dataclass(frozen=True)
class ConsistencyStats:
    period_days: int
    activities_in_period: int
    current_streak: int
    longest_streak: int
    avg_per_week: float
    days_since_last: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period_days": self.period_days,
            "runs_in_period": self.activities_in_period,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "avg_runs_per_week": self.avg_per_week,
            "days_since_last_run": self.days_since_last,
        }


@dataclass(frozen=True)
class LocationCluster:
    """Activities sharing the same rounded start coordinates."""
    lat: float
    lon: float
    run_count: int
    total_distance_m: float
    avg_distance_m: float

    @property
    def label(self) -> str:
        return f"{self.lat}, {self.lon}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "label": self.label,
            "run_count": self.run_count,
            "total_distance": self.total_distance_m,
            "avg_distance": self.avg_distance_m,
        }


@dataclass(frozen=True)
class PersonalRecord:
    """
    A single best effort.

    `value` is in the record's own unit: km for distance, metres for
    elevation, seconds for timed records.
    """
    value: float
    date: date
    activity_id: str
    formatted: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "value": self.value,
            "date": self.date.isoformat(),
            "activity_id": self.activity_id,
        }
        if self.formatted is not None:
            data["time"] = self.formatted
        return data


@dataclass(frozen=True)
class PersonalRecords:
    longest_distance: Optional[PersonalRecord] = None
    fastest_5k: Optional[PersonalRecord] = None
    fastest_10k: Optional[PersonalRecord] = None
    most_elevation: Optional[PersonalRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: record.to_dict() if record is not None else None
            for name, record in (
                ("longest_distance", self.longest_distance),
                ("fastest_5k", self.fastest_5k),
                ("fastest_10k", self.fastest_10k),
                ("most_elevation", self.most_elevation),
            )
        }


@dataclass(frozen=True)
class Prediction:
    predicted_seconds: int
    predicted_time: str
    confidence: str  # high, medium, low
    sample_size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicted_seconds": self.predicted_seconds,
            "predicted_time": self.predicted_time,
            "confidence": self.confidence,
            "sample_size": self.sample_size,
        }
