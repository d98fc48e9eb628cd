"""HTTP tests for the API routers."""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.models.activity import ActivityKind, EventResult
from app.services.store import InMemoryActivityStore


@pytest.fixture
def history(make_activity):
    today = date.today()
    return [
        make_activity(today - timedelta(days=n), distance_m=6000, duration_s=1800,
                      coordinates=(51.5007, -0.1246), elevation_m=40.0)
        for n in range(1, 15, 2)
    ] + [
        make_activity(today - timedelta(days=3), distance_m=5000, duration_s=1450,
                      kind=ActivityKind.EVENT),
    ]


@pytest.fixture
def client(history, settings):
    store = InMemoryActivityStore(history, event_source_enabled=True)
    return TestClient(create_app(store=store, settings=settings))


@pytest.fixture
def empty_client(settings):
    return TestClient(create_app(store=InMemoryActivityStore(), settings=settings))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "runlog-backend"}


class TestStats:
    def test_summary_includes_events_when_enabled(self, client):
        data = client.get("/api/stats/summary").json()

        assert data["total_count"] == 8
        assert data["longest_distance_m"] == 6000

    def test_summary_lookback(self, client):
        data = client.get("/api/stats/summary", params={"days": 4}).json()
        # runs 1 and 3 days ago plus the event
        assert data["total_count"] == 3

    def test_summary_rejects_invalid_lookback(self, client):
        response = client.get("/api/stats/summary", params={"days": 0})
        assert response.status_code == 400

    def test_progress(self, client):
        data = client.get("/api/stats/progress", params={"period": "monthly"}).json()

        assert data["period"] == "monthly"
        assert sum(point["run_count"] for point in data["data"]) == 7

    def test_progress_rejects_unknown_period(self, client):
        response = client.get("/api/stats/progress", params={"period": "daily"})
        assert response.status_code == 400
        assert "period" in response.json()["detail"]

    def test_by_location(self, client):
        data = client.get("/api/stats/by-location").json()

        (location,) = data["locations"]
        assert location["run_count"] == 7
        assert location["label"] == "51.5007, -0.1246"

    def test_by_location_rejects_bad_precision(self, client):
        assert client.get("/api/stats/by-location", params={"precision": 12}).status_code == 400

    def test_consistency(self, client):
        data = client.get("/api/stats/consistency").json()

        assert data["period_days"] == 30
        assert data["days_since_last_run"] == 1
        assert data["current_streak"] == 1

    def test_personal_records(self, client):
        data = client.get("/api/stats/personal-records").json()

        assert data["longest_distance"]["value"] == 6
        assert data["fastest_5k"]["value"] == pytest.approx(1500)
        assert data["fastest_5k"]["time"] == "25:00"
        assert data["fastest_10k"] is None
        assert data["longest_distance"]["time"] is None

    def test_predict_5k(self, client):
        data = client.get("/api/stats/predict-5k").json()

        assert data["predicted_seconds"] == 1500
        assert data["confidence"] == "medium"

    def test_predict_5k_without_data(self, empty_client):
        response = empty_client.get("/api/stats/predict-5k")
        assert response.status_code == 404

    def test_weekly_distance(self, client):
        data = client.get("/api/stats/weekly-distance", params={"weeks": 4}).json()

        assert len(data["data"]) == 4
        assert all(point["distance"] >= 0 for point in data["data"])

    def test_weekly_distance_rejects_bad_weeks(self, client):
        assert client.get("/api/stats/weekly-distance", params={"weeks": 0}).status_code == 400


class TestRecommendations:
    def test_plan(self, client):
        response = client.get("/api/recommendations", params={"weeks": 2})
        assert response.status_code == 200

        data = response.json()
        assert len(data["recommendations"]) == 2
        assert set(data["currentStats"]) == {"weeklyAverage", "currentRunsPerWeek", "last4Weeks"}
        types = {run["type"] for week in data["recommendations"] for run in week["runs"]}
        assert "event" in types

    def test_plan_for_empty_history(self, empty_client):
        data = empty_client.get("/api/recommendations").json()

        assert len(data["recommendations"]) == 4
        assert data["recommendations"][0]["targetDistance"] == 5

    @pytest.mark.parametrize(
        "params",
        [
            {"weeks": 0},
            {"weeks": 13},
            {"goalDistance": 2},
            {"goalDistance": 500},
            {"goalDistance": "nan"},
            {"goalDistance": "inf"},
        ],
    )
    def test_invalid_parameters(self, client, params):
        response = client.get("/api/recommendations", params=params)
        assert response.status_code == 400

    def test_calendar_export(self, client):
        response = client.get("/api/recommendations/calendar.ics", params={"weeks": 1})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/calendar")
        assert "attachment" in response.headers["content-disposition"]
        assert response.text.startswith("BEGIN:VCALENDAR")

    def test_calendar_export_validates_first(self, client):
        response = client.get("/api/recommendations/calendar.ics", params={"weeks": 20})
        assert response.status_code == 400

    def test_non_finite_goal_is_rejected(self, client):
        response = client.get("/api/recommendations", params={"goalDistance": "nan"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Goal distance must be between 5 and 200 km per week"

    def test_calendar_export_rejects_non_finite_goal(self, client):
        response = client.get("/api/recommendations/calendar.ics", params={"goalDistance": "nan"})
        assert response.status_code == 400

    def test_plan_response_shape(self, client):
        data = client.get("/api/recommendations", params={"weeks": 1}).json()

        (week,) = data["recommendations"]
        assert set(week) == {"weekStart", "targetDistance", "runs"}
        for run in week["runs"]:
            assert set(run) == {"date", "type", "distance", "duration", "notes"}


@pytest.fixture
def results_client(settings):
    store = InMemoryActivityStore(
        event_source_enabled=True,
        event_results=[
            EventResult(id="e1", event_date=date(2025, 10, 4), finish_time="24:10",
                        position=42, total_runners=310),
            EventResult(id="e2", event_date=date(2025, 10, 11), finish_time="23:50"),
        ],
    )
    return TestClient(create_app(store=store, settings=settings))


class TestRuns:
    def test_list(self, client):
        data = client.get("/api/runs").json()

        assert data["total"] == 7
        assert data["has_more"] is False
        assert len(data["runs"]) == 7
        dates = [run["start_date_local"] for run in data["runs"]]
        assert dates == sorted(dates, reverse=True)
        assert all(run["kind"] == "run" for run in data["runs"])

    def test_paging(self, client):
        data = client.get("/api/runs", params={"limit": 3, "offset": 3}).json()

        assert len(data["runs"]) == 3
        assert data["total"] == 7
        assert data["limit"] == 3
        assert data["offset"] == 3
        assert data["has_more"] is True

    def test_date_filter(self, client):
        today = date.today()
        params = {
            "startDate": (today - timedelta(days=5)).isoformat(),
            "endDate": today.isoformat(),
            "sortOrder": "asc",
        }
        data = client.get("/api/runs", params=params).json()

        # runs 5, 3 and 1 days ago
        assert data["total"] == 3
        assert data["runs"][0]["start_date_local"].startswith(
            (today - timedelta(days=5)).isoformat()
        )

    @pytest.mark.parametrize(
        "params",
        [{"limit": 0}, {"offset": -1}, {"sortBy": "name"}, {"sortOrder": "up"}],
    )
    def test_invalid_parameters(self, client, params):
        assert client.get("/api/runs", params=params).status_code == 400

    def test_get_run(self, client):
        run_id = client.get("/api/runs", params={"limit": 1}).json()["runs"][0]["id"]
        data = client.get(f"/api/runs/{run_id}").json()

        assert data["id"] == run_id
        assert data["distance"] == 6000
        assert data["average_pace"] == "5:00"
        assert data["latitude_start"] == 51.5007

    def test_get_missing_run(self, client):
        response = client.get("/api/runs/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Run not found"


class TestEventResults:
    def test_list(self, results_client):
        data = results_client.get("/api/events/results").json()

        assert data["total"] == 2
        first = data["results"][0]
        assert first["event_date"] == "2025-10-04"
        assert first["position"] == 42
        assert first["finish_seconds"] == 1450
        assert data["results"][1]["position"] is None

    def test_date_filter(self, results_client):
        data = results_client.get(
            "/api/events/results", params={"startDate": "2025-10-05"}
        ).json()
        assert [result["id"] for result in data["results"]] == ["e2"]

    def test_invalid_date(self, results_client):
        response = results_client.get("/api/events/results", params={"startDate": "yesterday"})
        assert response.status_code == 422


class TestCalendar:
    def test_events_are_merged_and_sorted(self, results_client):
        params = {"startDate": "2025-10-01", "endDate": "2025-10-12"}
        data = results_client.get("/api/calendar/events", params=params).json()

        events = data["events"]
        assert [event["id"] for event in events] == ["event_e1", "event_e2"]
        assert events[0]["notes"] == "Position: 42/310"
        assert events[0]["type"] == "event"

    def test_window_with_planned_runs(self, client):
        today = date.today()
        params = {
            "startDate": (today - timedelta(days=14)).isoformat(),
            "endDate": (today + timedelta(days=14)).isoformat(),
        }
        events = client.get("/api/calendar/events", params=params).json()["events"]

        dates = [event["date"] for event in events]
        assert dates == sorted(dates)
        assert sum(event["type"] == "run" for event in events) == 7
        planned = [event for event in events if event["type"] == "recommendation"]
        assert planned
        assert all(event["date"] >= today.isoformat() for event in planned)
        assert all(event["id"].startswith("rec_") for event in planned)

    def test_rejects_reversed_window(self, client):
        params = {"startDate": "2026-10-10", "endDate": "2026-10-01"}
        response = client.get("/api/calendar/events", params=params)

        assert response.status_code == 400
        assert response.json()["detail"] == "startDate must not be after endDate"
