from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..core.constants import UNKNOWN_STUDENT_NAME
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_number
from .model import AttendanceRecord
from .repository import AttendanceRecordRepository

logger = logging.getLogger(__name__)


class MySQLAttendanceRecordRepository(AttendanceRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_records(
        self,
        *,
        start_date: date,
        end_date: date,
        session_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        where = ["a.attendance_date BETWEEN %s AND %s", "a.status IS NOT NULL", "a.status <> 'pending'"]
        params: list[Any] = [start_date, end_date]
        if session_id:
            where.append("a.session_id=%s")
            params.append(session_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.student_id, a.session_id, a.attendance_date, a.status, a.late_minutes,
                       COALESCE(h.host_address, a.host_address) AS host_address,
                       s.name AS student_name,
                       e.enrollment_date,
                       b.topic AS book_topic, b.start_page AS book_start_page, b.end_page AS book_end_page
                FROM attendance a
                LEFT JOIN students s ON s.student_id = a.student_id
                LEFT JOIN enrollments e ON e.enrollment_id = a.enrollment_id
                LEFT JOIN session_date_host h
                    ON h.session_id = a.session_id AND h.attendance_date = a.attendance_date
                LEFT JOIN session_book_coverage c
                    ON c.session_id = a.session_id AND c.attendance_date = a.attendance_date
                LEFT JOIN course_book_reference b ON b.reference_id = c.reference_id
                WHERE {" AND ".join(where)}
                ORDER BY a.attendance_date, a.student_id
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        records = []
        for r in rows:
            record = self._to_record(r)
            if record is not None:
                records.append(record)
        logger.debug("Loaded %d attendance records for %s..%s", len(records), start_date, end_date)
        return records

    @staticmethod
    def _to_record(r: Dict[str, Any]) -> Optional[AttendanceRecord]:
        try:
            status = AttendanceStatus(str(r["status"]).strip().lower())
        except ValueError:
            logger.warning("Skipping attendance row with unknown status %r", r.get("status"))
            return None

        late_minutes = normalize_mysql_number(r.get("late_minutes"))
        return AttendanceRecord(
            student_id=str(r["student_id"]),
            session_id=str(r["session_id"]),
            date=coerce_date(r["attendance_date"]),
            status=status,
            late_minutes=late_minutes if status == AttendanceStatus.LATE else None,
            host_location=r.get("host_address"),
            student_name=r.get("student_name") or UNKNOWN_STUDENT_NAME,
            enrollment_date=coerce_date(r.get("enrollment_date")),
            book_topic=r.get("book_topic"),
            book_start_page=r.get("book_start_page"),
            book_end_page=r.get("book_end_page"),
        )
