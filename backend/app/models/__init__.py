from app.models.activity import (
    Activity,
    ActivityKind,
    EventResult,
    Weekday,
    format_duration,
    parse_finish_time,
)
from app.models.feed import (
    ActivityPage,
    CalendarEntry,
    CalendarEntryType,
    EventResultPage,
)
from app.models.plan import (
    CurrentStats,
    RecommendationResponse,
    RecommendedRun,
    RunType,
    WeeklyPlan,
)
from app.models.stats import (
    ConsistencyStats,
    LocationCluster,
    PersonalRecord,
    PersonalRecords,
    Prediction,
    Summary,
    TrendPoint,
    WeeklyBucket,
    WeeklyDistancePoint,
)

__all__ = [
    "Activity",
    "ActivityKind",
    "EventResult",
    "Weekday",
    "format_duration",
    "parse_finish_time",
    "ActivityPage",
    "CalendarEntry",
    "CalendarEntryType",
    "EventResultPage",
    "CurrentStats",
    "RecommendationResponse",
    "RecommendedRun",
    "RunType",
    "WeeklyPlan",
    "ConsistencyStats",
    "LocationCluster",
    "PersonalRecord",
    "PersonalRecords",
    "Prediction",
    "Summary",
    "TrendPoint",
    "WeeklyBucket",
    "WeeklyDistancePoint",
]
