"""
Stats Service - Per-request orchestration of the analytics engine.

Each method takes one snapshot from the activity store and hands it to a
pure analytics function. The service holds no state besides its injected
collaborators, so one instance can serve concurrent requests.
"""
from datetime import date, datetime
from typing import List, Optional, Tuple

from app.core.config import Settings
from app.core.logging import get_logger, track_computation
from app.models.activity import Activity, ActivityKind, Weekday
from app.models.plan import RecommendationResponse
from app.models.stats import (
    ConsistencyStats,
    LocationCluster,
    PersonalRecords,
    Prediction,
    Summary,
    TrendPoint,
    WeeklyDistancePoint,
)
from app.services.analytics import (
    cluster_by_location,
    consistency,
    pace_trend,
    personal_records,
    predict_5k,
    summarize,
    weekly_distance,
)
from app.services.export import ExportService
from app.services.recommendation import RecommendationScheduler, SchedulerConfig
from app.services.store import ActivityStore

logger = get_logger(__name__)


class StatsService:
    """
    Statistics and recommendations for the stored activity history.

    Usage:
        service = StatsService(store, settings)
        summary = service.get_summary(lookback_days=30)
    """

    def __init__(self, store: ActivityStore, settings: Settings):
        self.store = store
        self.settings = settings
        self.export = ExportService()

    @property
    def events_enabled(self) -> bool:
        """Event results are folded in only when the event source is on."""
        return self.store.event_source_enabled

    def _snapshot(self, include_events: bool) -> Tuple[Activity, ...]:
        if include_events:
            return self.store.list_activities(kinds=[ActivityKind.RUN, ActivityKind.EVENT])
        return self.store.list_runs()

    def scheduler_config(self) -> SchedulerConfig:
        return SchedulerConfig(
            event_enabled=self.events_enabled,
            event_weekday=Weekday(self.settings.EVENT_WEEKDAY),
            event_distance_km=self.settings.EVENT_DISTANCE_KM,
        )

    # ========================================
    # Statistics
    # ========================================

    def get_summary(
        self,
        lookback_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Summary:
        activities = self._snapshot(self.events_enabled)
        with track_computation(logger, "summary", activities=len(activities)):
            return summarize(activities, lookback_days=lookback_days, now=now)

    def get_pace_trend(self, period: str = "weekly") -> List[TrendPoint]:
        activities = self._snapshot(include_events=False)
        with track_computation(logger, "pace_trend", period=period):
            return list(pace_trend(activities, period))

    def get_consistency(
        self,
        lookback_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ConsistencyStats:
        if lookback_days is None:
            lookback_days = self.settings.DEFAULT_CONSISTENCY_DAYS
        activities = self._snapshot(self.events_enabled)
        with track_computation(logger, "consistency", lookback_days=lookback_days):
            return consistency(
                activities,
                include_events=self.events_enabled,
                lookback_days=lookback_days,
                now=now,
            )

    def get_location_clusters(self, precision_digits: int = 4) -> List[LocationCluster]:
        activities = self._snapshot(include_events=False)
        with track_computation(logger, "location_clusters", precision_digits=precision_digits):
            return cluster_by_location(activities, precision_digits=precision_digits)

    def get_personal_records(self) -> PersonalRecords:
        activities = self._snapshot(include_events=False)
        with track_computation(logger, "personal_records", activities=len(activities)):
            return personal_records(activities)

    def predict_short_distance(self) -> Optional[Prediction]:
        activities = self._snapshot(include_events=False)
        with track_computation(logger, "predict_5k", activities=len(activities)):
            return predict_5k(activities)

    def get_weekly_distance(
        self,
        weeks: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[WeeklyDistancePoint]:
        if weeks is None:
            weeks = self.settings.DEFAULT_WEEKLY_DISTANCE_WEEKS
        activities = self._snapshot(include_events=False)
        with track_computation(logger, "weekly_distance", weeks=weeks):
            return weekly_distance(activities, weeks=weeks, today=today)

    # ========================================
    # Recommendations
    # ========================================

    def generate_schedule(
        self,
        weeks_ahead: int = 4,
        goal_weekly_km: Optional[float] = None,
        today: Optional[date] = None,
    ) -> RecommendationResponse:
        scheduler = RecommendationScheduler(self.scheduler_config())
        return scheduler.generate(
            self._snapshot(include_events=False),
            weeks_ahead=weeks_ahead,
            goal_weekly_km=goal_weekly_km,
            today=today,
        )

    def export_schedule_ical(
        self,
        weeks_ahead: int = 4,
        goal_weekly_km: Optional[float] = None,
        today: Optional[date] = None,
    ) -> str:
        response = self.generate_schedule(weeks_ahead, goal_weekly_km, today)
        return self.export.export_to_ical(response)
