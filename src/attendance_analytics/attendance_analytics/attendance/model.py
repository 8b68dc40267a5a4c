from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import SESSION_NOT_HELD, UNKNOWN_STUDENT_NAME
from ..core.enums import AttendanceStatus


def is_session_not_held(host_location: Optional[str]) -> bool:
    return bool(host_location) and host_location.strip().upper() == SESSION_NOT_HELD


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's recorded outcome for one session date."""

    student_id: str
    session_id: str
    date: date
    status: AttendanceStatus
    late_minutes: Optional[float] = None
    host_location: Optional[str] = None

    # Display/context passthrough, never used in scoring.
    student_name: str = UNKNOWN_STUDENT_NAME
    enrollment_date: Optional[date] = None
    book_topic: Optional[str] = None
    book_start_page: Optional[int] = None
    book_end_page: Optional[int] = None

    @property
    def session_held(self) -> bool:
        return not is_session_not_held(self.host_location)
