"""
Activity Service - Read-only listings and the merged calendar feed.
"""
import math
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.core.config import Settings
from app.core.errors import ValidationError, validate_choice, validate_range
from app.core.logging import get_logger, track_computation
from app.core.numbers import round_half_up, round_int
from app.models.activity import Activity, ActivityKind, EventResult, format_duration
from app.models.feed import ActivityPage, CalendarEntry, CalendarEntryType, EventResultPage
from app.services.analytics.calendar import resolve_today
from app.services.recommendation.scheduler import MAX_WEEKS_AHEAD
from app.services.stats_service import StatsService
from app.services.store import ActivityStore

logger = get_logger(__name__)

MAX_PAGE_SIZE = 1000
MIN_CALENDAR_WEEKS = 4
CALENDAR_WEEKS_BUFFER = 2

SORT_KEYS: Dict[str, Callable[[Activity], Any]] = {
    "start_date": lambda a: a.occurred_at,
    "distance": lambda a: a.distance_meters,
    "moving_time": lambda a: a.duration_seconds,
}
SORT_ORDERS = ("asc", "desc")


def _validate_window(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationError("startDate must not be after endDate", field="startDate")


def _validate_page(limit: int, offset: int) -> None:
    validate_range(limit, "limit", 1, MAX_PAGE_SIZE)
    validate_range(offset, "offset", 0)


def _datetime_bounds(
    start_date: Optional[date],
    end_date: Optional[date],
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Inclusive date range as a half-open local datetime range."""
    start = datetime.combine(start_date, time.min) if start_date is not None else None
    end = (
        datetime.combine(end_date + timedelta(days=1), time.min)
        if end_date is not None else None
    )
    return start, end


class ActivityService:
    """
    Browsing access to stored runs and event results.

    Usage:
        service = ActivityService(store, settings)
        page = service.list_runs(limit=20)
        entries = service.calendar_events(date(2026, 10, 1), date(2026, 10, 31))
    """

    def __init__(self, store: ActivityStore, settings: Settings):
        self.store = store
        self.stats = StatsService(store, settings)

    # ========================================
    # Listings
    # ========================================

    def list_runs(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
        offset: int = 0,
        sort_by: str = "start_date",
        sort_order: str = "desc",
    ) -> ActivityPage:
        """
        Page through runs, newest first by default.

        Raises:
            ValidationError: bad paging, sort field, sort order or date window
        """
        _validate_page(limit, offset)
        validate_choice(sort_by, "sortBy", SORT_KEYS)
        validate_choice(sort_order, "sortOrder", SORT_ORDERS)
        _validate_window(start_date, end_date)

        start, end = _datetime_bounds(start_date, end_date)
        runs = list(self.store.list_activities(start=start, end=end, kinds=[ActivityKind.RUN]))
        runs.sort(key=SORT_KEYS[sort_by], reverse=sort_order == "desc")

        return ActivityPage(
            items=tuple(runs[offset:offset + limit]),
            total=len(runs),
            limit=limit,
            offset=offset,
        )

    def get_run(self, run_id: str) -> Optional[Activity]:
        activity = self.store.get_activity(run_id)
        if activity is None or activity.kind != ActivityKind.RUN:
            return None
        return activity

    def list_event_results(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> EventResultPage:
        _validate_page(limit, offset)
        _validate_window(start_date, end_date)

        results = self.store.list_event_results(start=start_date, end=end_date)
        return EventResultPage(
            items=results[offset:offset + limit],
            total=len(results),
            limit=limit,
            offset=offset,
        )

    # ========================================
    # Calendar
    # ========================================

    def calendar_events(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> List[CalendarEntry]:
        """
        Runs, event results and planned runs in one list, sorted by date.

        Runs and results are filtered by the given dates (open-ended when a
        bound is missing). Planned runs are generated without a goal and
        kept only inside [start_date or today, end_date or today].

        Raises:
            ValidationError: start_date after end_date
        """
        _validate_window(start_date, end_date)
        today = resolve_today(today)

        with track_computation(logger, "calendar_events") as extra:
            start, end = _datetime_bounds(start_date, end_date)
            entries = [
                self._run_entry(run)
                for run in self.store.list_activities(
                    start=start, end=end, kinds=[ActivityKind.RUN]
                )
            ]
            entries.extend(
                self._event_entry(result)
                for result in self.store.list_event_results(start=start_date, end=end_date)
            )
            entries.extend(self._planned_entries(start_date or today, end_date or today, today))

            entries.sort(key=lambda entry: entry.date)
            extra.update(entries=len(entries))

        return entries

    def _planned_entries(self, window_start: date, window_end: date, today: date) -> List[CalendarEntry]:
        if window_end < window_start or window_end < today:
            return []

        span_days = (window_end - window_start).days + 1
        weeks = max(MIN_CALENDAR_WEEKS, math.ceil(span_days / 7) + CALENDAR_WEEKS_BUFFER)
        response = self.stats.generate_schedule(
            weeks_ahead=min(weeks, MAX_WEEKS_AHEAD), today=today
        )

        entries = []
        for week in response.recommendations:
            for run in week.runs:
                if not window_start <= run.date <= window_end:
                    continue
                entries.append(
                    CalendarEntry(
                        id=f"rec_{week.week_start_date.isoformat()}_{run.date.isoformat()}",
                        date=run.date,
                        entry_type=CalendarEntryType.RECOMMENDATION,
                        title=f"{run.run_type.value.capitalize()} - {run.notes}",
                        source="recommendation",
                        distance_km=run.distance_km,
                        duration_minutes=run.duration_minutes,
                        notes=run.notes,
                    )
                )
        return entries

    @staticmethod
    def _run_entry(run: Activity) -> CalendarEntry:
        pace = run.pace_seconds_per_km
        pace_text = format_duration(pace) if pace is not None else "N/A"
        return CalendarEntry(
            id=f"run_{run.id}",
            date=run.local_date,
            entry_type=CalendarEntryType.RUN,
            title=run.name or "Run",
            source="activity",
            distance_km=round_half_up(run.distance_km, 2),
            duration_minutes=round_int(run.duration_seconds / 60),
            notes=f"Avg pace: {pace_text}/km",
        )

    @staticmethod
    def _event_entry(result: EventResult) -> CalendarEntry:
        notes = None
        if result.position is not None:
            notes = f"Position: {result.position}/{result.total_runners or '?'}"
        return CalendarEntry(
            id=f"event_{result.id}",
            date=result.event_date,
            entry_type=CalendarEntryType.EVENT,
            title="Weekly timed event",
            source="event",
            distance_km=result.distance_meters / 1000,
            duration_minutes=round_int(result.finish_seconds / 60),
            notes=notes,
        )
