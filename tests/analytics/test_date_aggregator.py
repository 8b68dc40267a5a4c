from __future__ import annotations

from datetime import date

from src.attendance_analytics.attendance_analytics.analytics.date_aggregator import SessionDateAggregator
from src.attendance_analytics.attendance_analytics.analytics.host_ranking import rank_hosts
from src.attendance_analytics.attendance_analytics.attendance.classifier import prepare_records
from src.attendance_analytics.attendance_analytics.attendance.model import AttendanceRecord
from src.attendance_analytics.attendance_analytics.core.constants import SESSION_NOT_HELD
from src.attendance_analytics.attendance_analytics.core.enums import AttendanceStatus

D1, D2, D3 = date(2025, 3, 3), date(2025, 3, 4), date(2025, 3, 5)
NAMES = {"s1": "Ann", "s2": "Ben", "s3": "Cal"}


def rec(student_id, day, status, **kwargs):
    return AttendanceRecord(
        student_id=student_id,
        session_id="c1",
        date=day,
        status=status,
        student_name=NAMES[student_id],
        **kwargs,
    )


def build():
    records = [
        rec("s1", D1, AttendanceStatus.ON_TIME, host_location="Hall A", book_topic="Ch 1", book_start_page=1, book_end_page=10),
        rec("s2", D1, AttendanceStatus.LATE, late_minutes=5, host_location="Hall A"),
        rec("s1", D2, AttendanceStatus.ABSENT, host_location="Hall B"),
        rec("s3", D2, AttendanceStatus.EXCUSED, host_location="Hall B"),
        rec("s1", D3, AttendanceStatus.ON_TIME, host_location=SESSION_NOT_HELD),
        rec("s2", D3, AttendanceStatus.ABSENT, host_location=SESSION_NOT_HELD),
    ]
    return SessionDateAggregator().build_date_aggregates(prepare_records(records))


def test_dates_are_sorted():
    assert [a.date for a in build()] == [D1, D2, D3]


def test_held_date_counts_and_context():
    d1 = build()[0]

    assert (d1.present_count, d1.late_count, d1.excused_count, d1.unexcused_absent_count) == (1, 1, 0, 0)
    assert d1.attendance_rate == 100.0
    assert d1.present_names == ["Ann"]
    assert d1.late_names == ["Ben"]
    assert d1.host_location == "Hall A"
    assert (d1.book_topic, d1.book_start_page, d1.book_end_page) == ("Ch 1", 1, 10)


def test_unmarked_enrolled_students_count_as_absent():
    d2 = build()[1]

    # s2 was enrolled on D1 but has no record for D2.
    assert d2.unexcused_absent_count == 2
    assert d2.absent_names == ["Ann", "Ben"]
    assert d2.excused_names == ["Cal"]
    assert d2.attendance_rate == 0.0


def test_not_held_date_excuses_all_students():
    d3 = build()[2]

    assert d3.session_held is False
    assert d3.excused_names == ["All Students"]
    assert d3.excused_count == 3
    assert d3.unexcused_absent_count == 0
    assert d3.present_count == 0


def test_not_held_date_is_left_out_of_host_ranking():
    hosts = rank_hosts(build())

    assert [h.host_location for h in hosts] == ["Hall A", "Hall B"]
    assert all(D3 not in h.dates for h in hosts)


def test_no_records_no_dates():
    assert SessionDateAggregator().build_date_aggregates([]) == []
