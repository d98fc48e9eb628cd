"""
Export Service - Export recommended plans to calendar format.

Currently supports:
- iCal (.ics) calendar format
"""
from datetime import date, datetime, timedelta, timezone
from io import StringIO
from typing import Optional

from app.core.logging import get_logger
from app.models.plan import RecommendationResponse, RecommendedRun, RunType

logger = get_logger(__name__)

RUN_TYPE_TITLES = {
    RunType.EASY: "Easy run",
    RunType.LONG: "Long run",
    RunType.TEMPO: "Tempo run",
    RunType.REST: "Rest day",
    RunType.EVENT: "Weekly timed event",
}


class ExportService:
    """
    Service for exporting recommended plans.
    """

    def export_to_ical(
        self,
        response: RecommendationResponse,
        calendar_name: str = "Running Plan",
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Export a recommended plan to iCal format.

        Args:
            response: Generated recommendation response
            calendar_name: Name for the calendar
            generated_at: DTSTAMP for every event (defaults to now, UTC)

        Returns:
            iCal formatted string
        """
        stamp = (generated_at or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")
        output = StringIO()

        # iCal header
        output.write("BEGIN:VCALENDAR\r\n")
        output.write("VERSION:2.0\r\n")
        output.write("PRODID:-//Runlog//Training Plan//EN\r\n")
        output.write(f"X-WR-CALNAME:{calendar_name}\r\n")
        output.write("CALSCALE:GREGORIAN\r\n")
        output.write("METHOD:PUBLISH\r\n")

        events = 0
        for week_number, week in enumerate(response.recommendations, 1):
            for run in week.runs:
                output.write(self._create_ical_event(run, week_number, stamp))
                events += 1

        # iCal footer
        output.write("END:VCALENDAR\r\n")

        result = output.getvalue()
        output.close()

        logger.info(
            "Exported plan to iCal",
            weeks=len(response.recommendations),
            events=events,
        )

        return result

    def _create_ical_event(self, run: RecommendedRun, week_number: int, stamp: str) -> str:
        """Create a single all-day iCal event."""
        title = RUN_TYPE_TITLES[run.run_type]
        if run.distance_km is not None:
            title = f"{title} - {run.distance_km:g} km"

        description = f"Week {week_number} - {self._escape(run.notes)}"
        if run.duration_minutes is not None:
            description += f"\\nEstimated duration: {run.duration_minutes} min"

        uid = f"{run.date.isoformat()}-{run.run_type.value}@runlog"
        date_str = run.date.strftime("%Y%m%d")
        next_date = (run.date + timedelta(days=1)).strftime("%Y%m%d")

        return (
            "BEGIN:VEVENT\r\n"
            f"UID:{uid}\r\n"
            f"DTSTAMP:{stamp}\r\n"
            f"DTSTART;VALUE=DATE:{date_str}\r\n"
            f"DTEND;VALUE=DATE:{next_date}\r\n"
            f"SUMMARY:{self._escape(title)}\r\n"
            f"DESCRIPTION:{description}\r\n"
            "STATUS:CONFIRMED\r\n"
            "TRANSP:TRANSPARENT\r\n"
            "END:VEVENT\r\n"
        )

    @staticmethod
    def _escape(text: str) -> str:
        """Escape iCal TEXT special characters."""
        return (
            text.replace("\\", "\\\\")
            .replace(";", "\\;")
            .replace(",", "\\,")
            .replace("\n", "\\n")
        )

    def get_ical_content_type(self) -> str:
        """Get the content type for iCal files."""
        return "text/calendar; charset=utf-8"

    def get_ical_filename(self, start: date) -> str:
        """Generate filename for iCal export."""
        return f"running-plan-{start.isoformat()}.ics"
