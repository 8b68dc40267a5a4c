from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from src.attendance_analytics.attendance_analytics.attendance.mysql_attendance_repository import (
    MySQLAttendanceRecordRepository,
)
from src.attendance_analytics.attendance_analytics.core.enums import AttendanceStatus


def row(**overrides):
    base = {
        "student_id": 7,
        "session_id": "c1",
        "attendance_date": date(2025, 2, 3),
        "status": "late",
        "late_minutes": Decimal("12.5"),
        "host_address": "Main Hall",
        "student_name": "Ana",
        "enrollment_date": datetime(2025, 1, 1, 9, 0),
        "book_topic": None,
        "book_start_page": None,
        "book_end_page": None,
    }
    base.update(overrides)
    return base


def test_row_maps_to_record():
    r = MySQLAttendanceRecordRepository._to_record(row())

    assert r.student_id == "7"
    assert r.status == AttendanceStatus.LATE
    assert r.late_minutes == 12.5
    assert r.enrollment_date == date(2025, 1, 1)


def test_status_is_normalized_and_minutes_kept_only_for_late():
    r = MySQLAttendanceRecordRepository._to_record(row(status="On Time"))

    assert r.status == AttendanceStatus.ON_TIME
    assert r.late_minutes is None


def test_unknown_status_is_skipped():
    assert MySQLAttendanceRecordRepository._to_record(row(status="holiday")) is None


def test_missing_name_falls_back():
    r = MySQLAttendanceRecordRepository._to_record(row(student_name=None, attendance_date="2025-02-03"))

    assert r.student_name == "Unknown"
    assert r.date == date(2025, 2, 3)
