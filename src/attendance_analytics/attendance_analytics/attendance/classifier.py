from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


def classify_record(record: AttendanceRecord, enrollment_date: Optional[date]) -> AttendanceStatus:
    """Effective status of a record once the enrollment date is taken into account.

    A record dated before the student's enrollment is NOT_ENROLLED whatever was
    stored. Without an enrollment date the stored status is trusted as-is.
    """

    if enrollment_date is not None and record.date < enrollment_date:
        return AttendanceStatus.NOT_ENROLLED
    if enrollment_date is None and record.status == AttendanceStatus.NOT_ENROLLED:
        logger.debug(
            "Record for student %s on %s is 'not enrolled' without an enrollment date",
            record.student_id,
            record.date,
        )
    return record.status


def not_held_dates(records: Iterable[AttendanceRecord]) -> set[date]:
    """Dates on which any record flags the session as not held."""

    return {r.date for r in records if not r.session_held}


def prepare_records(records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
    """Pre-processing pass run once before any aggregation.

    - derives NOT_ENROLLED from the enrollment date and drops those records
    - marks every record on a not-held session date as EXCUSED
    - keeps the first record per (student, date)
    """

    cancelled = not_held_dates(records)
    prepared: list[AttendanceRecord] = []
    seen: set[tuple[str, date]] = set()
    dropped = 0

    for r in records:
        status = classify_record(r, r.enrollment_date)
        if status == AttendanceStatus.NOT_ENROLLED:
            dropped += 1
            continue

        key = (r.student_id, r.date)
        if key in seen:
            logger.warning("Duplicate attendance record for student %s on %s ignored", r.student_id, r.date)
            continue
        seen.add(key)

        if r.date in cancelled:
            status = AttendanceStatus.EXCUSED
        if status != r.status:
            r = replace(r, status=status, late_minutes=None)
        prepared.append(r)

    if dropped:
        logger.debug("Dropped %d 'not enrolled' records before scoring", dropped)
    return prepared
