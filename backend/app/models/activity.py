"""
Activity domain records.

An Activity is either a run imported from the activity-tracking API or a
result of the recurring weekly timed event. Records are immutable; the
analytics engine only ever reads snapshots of them.

Preconditions (enforced by the importing collaborators, not here):
distance_meters >= 0 and duration_seconds >= 0.
"""
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple

from app.core.logging import get_logger

logger = get_logger(__name__)


class ActivityKind(str, Enum):
    """Source of an activity record."""
    RUN = "run"
    EVENT = "event"


class Weekday(IntEnum):
    """Weekday numbering as returned by date.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def short_label(self) -> str:
        return self.label[:3]

    @property
    def is_weekend(self) -> bool:
        return self in (Weekday.SATURDAY, Weekday.SUNDAY)


# Natural calendar order used for tie-breaks (Sunday first)
SUNDAY_FIRST = (
    Weekday.SUNDAY,
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
)


@dataclass(frozen=True)
class Activity:
    """A single recorded run or timed-event result."""
    id: str
    occurred_at: datetime  # naive, source-local
    distance_meters: float
    duration_seconds: float
    kind: ActivityKind = ActivityKind.RUN
    start_coordinates: Optional[Tuple[float, float]] = None  # (lat, lon)
    elevation_gain_meters: Optional[float] = None
    name: str = ""

    @property
    def local_date(self) -> date:
        return self.occurred_at.date()

    @property
    def weekday(self) -> Weekday:
        return Weekday(self.occurred_at.weekday())

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000

    @property
    def has_pace(self) -> bool:
        """Pace is only defined when both distance and duration are positive."""
        return self.distance_meters > 0 and self.duration_seconds > 0

    @property
    def pace_seconds_per_km(self) -> Optional[float]:
        if not self.has_pace:
            return None
        return self.duration_seconds * 1000 / self.distance_meters

    @property
    def speed_kmh(self) -> Optional[float]:
        if not self.has_pace:
            return None
        return (self.distance_meters / 1000) / (self.duration_seconds / 3600)

    @property
    def is_event(self) -> bool:
        return self.kind == ActivityKind.EVENT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        lat, lon = self.start_coordinates or (None, None)
        pace = self.pace_seconds_per_km
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "start_date_local": self.occurred_at.isoformat(),
            "distance": self.distance_meters,
            "moving_time": self.duration_seconds,
            "total_elevation_gain": self.elevation_gain_meters,
            "latitude_start": lat,
            "longitude_start": lon,
            "pace_seconds_per_km": pace,
            "average_pace": format_duration(pace) if pace is not None else None,
        }


def parse_finish_time(text: str) -> int:
    """
    Parse a finish time into seconds.

    Accepts HH:MM:SS and MM:SS. Anything else is treated as a malformed
    import and yields 0, which keeps the record out of pace averages.
    """
    try:
        parts = [int(part) for part in text.strip().split(":")]
    except (AttributeError, ValueError):
        parts = []

    if len(parts) == 3:
        hours, minutes, seconds = parts
        return hours * 3600 + minutes * 60 + seconds
    if len(parts) == 2:
        minutes, seconds = parts
        return minutes * 60 + seconds

    logger.warning("Unparseable finish time", finish_time=text)
    return 0


def format_duration(seconds: float) -> str:
    """Format seconds as M:SS, or H:MM:SS from one hour upwards."""
    total = int(seconds + 0.5)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


@dataclass(frozen=True)
class EventResult:
    """
    One result from the recurring weekly timed event.

    Results are scraped from the event's results page by an external
    collaborator; `to_activity` folds them into the activity stream.
    """
    id: str
    event_date: date
    finish_time: str
    position: Optional[int] = None
    total_runners: Optional[int] = None
    distance_meters: float = 5000.0
    start_time: time = time(9, 0)

    @property
    def finish_seconds(self) -> int:
        return parse_finish_time(self.finish_time)

    def to_activity(self) -> Activity:
        """Convert to an event-kind Activity."""
        return Activity(
            id=self.id,
            occurred_at=datetime.combine(self.event_date, self.start_time),
            distance_meters=self.distance_meters,
            duration_seconds=self.finish_seconds,
            kind=ActivityKind.EVENT,
            name="Weekly timed event",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "event_date": self.event_date.isoformat(),
            "finish_time": self.finish_time,
            "finish_seconds": self.finish_seconds,
            "position": self.position,
            "total_runners": self.total_runners,
            "distance": self.distance_meters,
        }
