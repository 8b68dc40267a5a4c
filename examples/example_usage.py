"""Example: score an in-memory dataset through the service layer (no Flask, no DB)."""

from datetime import date

from src.attendance_analytics.attendance_analytics.analytics.service import AnalyticsService
from src.attendance_analytics.attendance_analytics.attendance.model import AttendanceRecord
from src.attendance_analytics.attendance_analytics.core.constants import SESSION_NOT_HELD
from src.attendance_analytics.attendance_analytics.core.enums import AttendanceStatus
from src.attendance_analytics.attendance_analytics.policy.model import DEFAULT_POLICY
from src.attendance_analytics.attendance_analytics.policy.repository import InMemoryPolicyStore
from src.attendance_analytics.attendance_analytics.policy.service import PolicyService


class ListRepo:
    def __init__(self, records):
        self._records = records

    def get_records(self, *, start_date, end_date, session_id=None):
        return [r for r in self._records if start_date <= r.date <= end_date]


def main():
    days = [date(2025, 3, d) for d in (3, 4, 5, 6, 7)]
    records = []
    for i, d in enumerate(days):
        host = SESSION_NOT_HELD if i == 2 else "Main Hall"
        records.append(AttendanceRecord("s1", "c1", d, AttendanceStatus.ON_TIME, host_location=host, student_name="Ana"))
        status = AttendanceStatus.LATE if i % 2 else AttendanceStatus.ABSENT
        records.append(
            AttendanceRecord("s2", "c1", d, status, late_minutes=12, host_location=host, student_name="Ben")
        )

    svc = AnalyticsService(ListRepo(records), PolicyService(InMemoryPolicyStore(DEFAULT_POLICY)))
    report = svc.evaluate_range(days[0], days[-1])

    for card in report.scorecards:
        print(card.rank, card.student_name, card.final_weighted_score, card.trend.classification.value)
    for host in report.hosts:
        print(host.rank, host.host_location, host.times_hosted, host.attendance_rate)


if __name__ == "__main__":
    main()
