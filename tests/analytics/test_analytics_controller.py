from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from src.attendance_analytics.attendance_analytics.analytics.service import AnalyticsService
from src.attendance_analytics.attendance_analytics.attendance.model import AttendanceRecord
from src.attendance_analytics.attendance_analytics.core.enums import AttendanceStatus
from src.attendance_analytics.attendance_analytics.main import create_app
from src.attendance_analytics.attendance_analytics.policy.repository import InMemoryPolicyStore
from src.attendance_analytics.attendance_analytics.policy.service import PolicyService


class FakeAttendanceRepo:
    def get_records(self, *, start_date, end_date, session_id=None):
        days = [date(2025, 1, 6), date(2025, 1, 7), date(2025, 1, 8)]
        return [
            AttendanceRecord("s1", "c1", d, AttendanceStatus.ON_TIME, host_location="Hall A", student_name="Ann")
            for d in days
            if start_date <= d <= end_date
        ]


@pytest.fixture()
def store():
    return InMemoryPolicyStore()


@pytest.fixture()
def client(monkeypatch, store):
    monkeypatch.setenv("APP_ENV", "testing")
    policy_service = PolicyService(store)
    container = SimpleNamespace(
        policy_service=policy_service,
        analytics_service=AnalyticsService(FakeAttendanceRepo(), policy_service),
    )
    app = create_app(container=container)
    return app.test_client()


def test_report(client):
    resp = client.get("/api/analytics/report?start=2025-01-01&end=2025-01-31")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["success"] is True
    report = body["report"]
    assert report["scorecards"][0]["student_name"] == "Ann"
    assert report["scorecards"][0]["trend"]["classification"] == "STABLE"
    assert [d["date"] for d in report["dates"]] == ["2025-01-06", "2025-01-07", "2025-01-08"]
    assert report["hosts"][0]["date_labels"] == ["Jan 06", "Jan 07", "Jan 08"]
    assert report["summary"]["trend_counts"]["STABLE"] == 1
    assert report["scorecards"][0]["late_bracket_counts"]["Minor"] == 0


@pytest.mark.parametrize(
    "query",
    ["start=2025-13-01&end=2025-01-31", "start=2025-02-01&end=2025-01-01"],
)
def test_report_rejects_bad_dates(client, query):
    resp = client.get(f"/api/analytics/report?{query}")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_get_policy_defaults(client):
    body = client.get("/api/scoring-policy").get_json()

    assert body["policy"]["weight_quality"] == 55
    assert body["policy"]["coverage_method"] == "sqrt"


def test_put_policy(client, store):
    resp = client.put(
        "/api/scoring-policy",
        json={"weight_quality": 50, "weight_attendance": 40, "weight_punctuality": 10, "coverage_method": "linear"},
    )

    assert resp.status_code == 200
    assert store.load().weight_attendance == 40
    assert client.get("/api/scoring-policy").get_json()["policy"]["coverage_method"] == "linear"


def test_put_invalid_policy(client, store):
    resp = client.put("/api/scoring-policy", json={"weight_quality": 99})

    assert resp.status_code == 400
    assert "sum to 100" in resp.get_json()["message"]
    assert store.load() is None


def test_put_requires_json_object(client):
    resp = client.put("/api/scoring-policy", data="nope", content_type="text/plain")

    assert resp.status_code == 400


def test_delete_resets_policy(client, store):
    client.put("/api/scoring-policy", json={"config_name": "Custom"})

    resp = client.delete("/api/scoring-policy")

    assert resp.status_code == 200
    assert resp.get_json()["policy"]["config_name"] == "Default Scoring"
    assert store.load() is None


def test_preview(client):
    body = client.get("/api/scoring-policy/preview").get_json()

    assert len(body["decay"]) == 51
    assert body["decay"][0] == {"minutes": 0, "credit": 100.0}
    assert body["coverage"][-1] == {"days": 30, "factor": 100.0}
