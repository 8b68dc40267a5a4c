from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRecordRepository(Protocol):
    def get_records(
        self,
        *,
        start_date: date,
        end_date: date,
        session_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Attendance rows in the date range, joined with student/enrollment/host/book context."""

        raise NotImplementedError
