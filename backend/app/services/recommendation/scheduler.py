"""
Recommendation Scheduler - Multi-week periodized training plan.

The plan is a simplified periodization heuristic:
- weekly distance grows 10% per week (compounding) from the current
  average or the runner's goal, capped at the goal
- each week has one long run (weekend if possible), one tempo run at least
  two days away from the long run, and a few easy runs
- runs are placed on the weekdays the runner already trains on
- the recurring weekly event, when enabled, is a fixed entry that counts
  toward the weekly target
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from app.core.errors import validate_range
from app.core.logging import get_logger, track_computation
from app.core.numbers import round_half_up, round_int
from app.models.activity import SUNDAY_FIRST, Activity, Weekday
from app.models.plan import (
    CurrentStats,
    RecommendationResponse,
    RecommendedRun,
    RunType,
    WeeklyPlan,
)
from app.services.analytics.aggregation import weekly_buckets
from app.services.analytics.calendar import (
    mean,
    next_week_start,
    resolve_today,
)

logger = get_logger(__name__)

HISTORY_DAYS = 56
PREFERRED_DAY_SHARE = 0.2
DEFAULT_RUN_DAYS = (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY, Weekday.SUNDAY)

MIN_WEEKLY_KM = 5
MAX_WEEKLY_KM = 200
MAX_WEEKS_AHEAD = 12
WEEKLY_INCREASE = 1.1

LONG_SHARE = 0.25
TEMPO_SHARE = 0.15
EASY_SHARE = 0.30
EASY_CAP_KM = 10
KM_PER_EASY_RUN = 8
MIN_EASY_RUNS = 2
MIN_HARD_SEPARATION_DAYS = 2

EASY_PACE_MIN_PER_KM = 6.0
TEMPO_PACE_MIN_PER_KM = 5.0

NOTES = {
    RunType.LONG: "Long run at comfortable pace. Stay hydrated.",
    RunType.EASY: "Easy recovery run, conversational pace.",
    RunType.REST: "Rest or cross-training day. Recovery is important!",
}


@dataclass(frozen=True)
class SchedulerConfig:
    """Immutable scheduler inputs that come from configuration."""
    event_enabled: bool = False
    event_weekday: Weekday = Weekday.SATURDAY
    event_distance_km: float = 5.0


def validate_request(weeks_ahead: int, goal_weekly_km: Optional[float]) -> None:
    """Reject out-of-range parameters before any computation."""
    validate_range(
        weeks_ahead, "weeks_ahead", 1, MAX_WEEKS_AHEAD,
        message=f"Weeks must be between 1 and {MAX_WEEKS_AHEAD}",
    )
    if goal_weekly_km is not None:
        validate_range(
            goal_weekly_km, "goal_weekly_km", MIN_WEEKLY_KM, MAX_WEEKLY_KM,
            message=(
                f"Goal distance must be between {MIN_WEEKLY_KM} and "
                f"{MAX_WEEKLY_KM} km per week"
            ),
        )


def preferred_days(recent: Sequence[Activity]) -> List[Weekday]:
    """
    Weekdays carrying at least 20% of recent activities.

    Falls back to Mon/Wed/Fri/Sun when fewer than two weekdays qualify.
    """
    counts = {day: 0 for day in Weekday}
    for activity in recent:
        counts[activity.weekday] += 1

    total = len(recent) or 1
    days = [day for day in Weekday if counts[day] / total >= PREFERRED_DAY_SHARE]
    if len(days) < 2:
        return sorted(DEFAULT_RUN_DAYS)
    return days


def weekly_targets(
    base_km: float,
    goal_weekly_km: Optional[float],
    weeks_ahead: int,
) -> List[float]:
    """10% compounding growth from base, capped at the goal when one is set."""
    cap = goal_weekly_km if goal_weekly_km is not None else float("inf")
    targets = [float(base_km)]
    for week in range(1, weeks_ahead):
        targets.append(float(min(cap, round_int(base_km * WEEKLY_INCREASE ** week))))
    return targets


def circular_day_distance(a: Weekday, b: Weekday) -> int:
    delta = abs(int(a) - int(b))
    return min(delta, 7 - delta)


def order_day_pool(days: Iterable[Weekday]) -> List[Weekday]:
    """Weekdays Monday to Friday first, then Sunday, then Saturday."""
    return sorted(set(days), key=lambda day: (day.is_weekend, SUNDAY_FIRST.index(day)))


def assign_run_types(pool: Sequence[Weekday], target_km: float) -> List[Tuple[Weekday, RunType]]:
    """
    Pick long, tempo and easy days from an ordered pool.

    Args:
        pool: Assignable weekdays in pool order
        target_km: Weekly target after removing the event distance

    Returns:
        (weekday, run type) pairs in assignment order
    """
    if not pool:
        return []

    long_day = next((day for day in pool if day.is_weekend), pool[0])
    assignments = [(long_day, RunType.LONG)]
    remaining = [day for day in pool if day != long_day]

    if remaining:
        tempo_day = next(
            (
                day for day in remaining
                if circular_day_distance(day, long_day) >= MIN_HARD_SEPARATION_DAYS
            ),
            remaining[0],
        )
        assignments.append((tempo_day, RunType.TEMPO))
        remaining.remove(tempo_day)

    easy_count = max(MIN_EASY_RUNS, round_int(target_km / KM_PER_EASY_RUN))
    assignments.extend((day, RunType.EASY) for day in remaining[:easy_count])

    return assignments


def estimate_duration(distance_km: float, run_type: RunType) -> int:
    """Minutes at 5:00/km for tempo and event efforts, 6:00/km otherwise."""
    if run_type in (RunType.TEMPO, RunType.EVENT):
        pace = TEMPO_PACE_MIN_PER_KM
    else:
        pace = EASY_PACE_MIN_PER_KM
    return round_int(distance_km * pace)


def _distance_for(run_type: RunType, target_km: float) -> int:
    if run_type == RunType.LONG:
        return round_int(target_km * LONG_SHARE)
    if run_type == RunType.TEMPO:
        return round_int(target_km * TEMPO_SHARE)
    return min(round_int(target_km * EASY_SHARE), EASY_CAP_KM)


def _build_run(run_date: date, run_type: RunType, target_km: float) -> RecommendedRun:
    distance = _distance_for(run_type, target_km)
    if distance <= 0:
        return RecommendedRun(date=run_date, run_type=RunType.REST, notes=NOTES[RunType.REST])

    if run_type == RunType.TEMPO:
        notes = f"Tempo run: warm up, {distance}km at comfortably hard pace, cool down."
    else:
        notes = NOTES[run_type]

    return RecommendedRun(
        date=run_date,
        run_type=run_type,
        notes=notes,
        distance_km=float(distance),
        duration_minutes=estimate_duration(distance, run_type),
    )


class RecommendationScheduler:
    """
    Builds training plans from recent history.

    Usage:
        scheduler = RecommendationScheduler(SchedulerConfig(event_enabled=True))
        response = scheduler.generate(runs, weeks_ahead=4, goal_weekly_km=30)
    """

    def __init__(self, config: Optional[SchedulerConfig] = None):
        self.config = config or SchedulerConfig()

    def generate(
        self,
        activities: Iterable[Activity],
        weeks_ahead: int = 4,
        goal_weekly_km: Optional[float] = None,
        today: Optional[date] = None,
    ) -> RecommendationResponse:
        """
        Generate a plan for the next weeks.

        Args:
            activities: Run history (any length; only the last 56 days are used)
            weeks_ahead: Number of weeks to plan, 1-12
            goal_weekly_km: Optional weekly distance goal, 5-200 km
            today: Reference date; plan weeks start on the next Monday

        Returns:
            RecommendationResponse. A runner with no history gets a 5 km/week
            plan on the default days.

        Raises:
            ValidationError: weeks_ahead or goal_weekly_km out of range
        """
        validate_request(weeks_ahead, goal_weekly_km)
        today = resolve_today(today)

        with track_computation(
            logger, "schedule", weeks_ahead=weeks_ahead, goal_weekly_km=goal_weekly_km
        ) as extra:
            cutoff = today - timedelta(days=HISTORY_DAYS)
            recent = [a for a in activities if a.local_date >= cutoff]

            buckets = weekly_buckets(recent)
            weekly_average = mean(b.total_distance_km for b in buckets)
            runs_per_week = mean(b.activity_count for b in buckets)

            run_days = preferred_days(recent)
            if self.config.event_enabled and self.config.event_weekday not in run_days:
                run_days = sorted(run_days + [self.config.event_weekday])

            base = goal_weekly_km if goal_weekly_km is not None else round_int(weekly_average)
            base = max(base, MIN_WEEKLY_KM)
            targets = weekly_targets(base, goal_weekly_km, weeks_ahead)

            first_week = next_week_start(today)
            recommendations = [
                self.plan_week(first_week + timedelta(weeks=week), target, run_days)
                for week, target in enumerate(targets)
            ]

            extra.update(
                recent_activities=len(recent),
                weekly_average=round_half_up(weekly_average, 1),
                run_days=[day.short_label for day in run_days],
            )

        return RecommendationResponse(
            current_stats=CurrentStats(
                weekly_average_km=round_half_up(weekly_average, 1),
                runs_per_week=round_half_up(runs_per_week, 1),
                last_weeks=buckets[-4:],
            ),
            recommendations=recommendations,
            rationale=self._rationale(weekly_average, runs_per_week, run_days, goal_weekly_km),
        )

    def plan_week(
        self,
        week_start: date,
        target_km: float,
        run_days: Sequence[Weekday],
    ) -> WeeklyPlan:
        """Lay out one week's runs, sorted by date."""
        pool = order_day_pool(run_days)
        effective_km = target_km
        runs: List[RecommendedRun] = []

        if self.config.event_enabled:
            event_day = self.config.event_weekday
            effective_km = max(target_km - self.config.event_distance_km, 0)
            pool = [day for day in pool if day != event_day]
            runs.append(
                RecommendedRun(
                    date=week_start + timedelta(days=int(event_day)),
                    run_type=RunType.EVENT,
                    notes=(
                        f"Weekly timed event ({self.config.event_distance_km:g} km). "
                        "Race it or run it as a steady effort."
                    ),
                    distance_km=float(self.config.event_distance_km),
                    duration_minutes=estimate_duration(
                        self.config.event_distance_km, RunType.EVENT
                    ),
                )
            )

        for day, run_type in assign_run_types(pool, effective_km):
            runs.append(
                _build_run(week_start + timedelta(days=int(day)), run_type, effective_km)
            )

        runs.sort(key=lambda run: run.date)
        return WeeklyPlan(week_start_date=week_start, target_distance_km=target_km, runs=runs)

    def _rationale(
        self,
        weekly_average: float,
        runs_per_week: float,
        run_days: Sequence[Weekday],
        goal_weekly_km: Optional[float],
    ) -> str:
        parts = [
            f"Based on your current weekly average of {weekly_average:.1f} km over "
            f"{runs_per_week:.1f} runs/week, we'll gradually increase by ~10% weekly"
        ]
        if goal_weekly_km is not None:
            parts[0] += f" up to your goal of {goal_weekly_km:g} km/week"
        parts[0] += "."
        parts.append(
            "Your preferred run days are "
            f"{', '.join(day.short_label for day in run_days)}."
        )
        if self.config.event_enabled:
            parts.append(
                f"The weekly timed event on {self.config.event_weekday.label} "
                f"counts {self.config.event_distance_km:g} km toward each week's target."
            )
        return " ".join(parts)


def generate_schedule(
    activities: Iterable[Activity],
    weeks_ahead: int = 4,
    goal_weekly_km: Optional[float] = None,
    config: Optional[SchedulerConfig] = None,
    today: Optional[date] = None,
) -> RecommendationResponse:
    """Functional entry point for RecommendationScheduler.generate."""
    return RecommendationScheduler(config).generate(
        activities,
        weeks_ahead=weeks_ahead,
        goal_weekly_km=goal_weekly_km,
        today=today,
    )
