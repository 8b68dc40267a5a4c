from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord, is_session_not_held
from ..core.constants import ALL_STUDENTS_LABEL
from ..core.enums import AttendanceStatus
from .model import DateAggregate


class SessionDateAggregator:
    """Per-date counts and rates over prepared records.

    A student enrolled by a date (any record on or before it) but without a
    record for that date is "unmarked" and counts as an unexcused absence.
    """

    def build_date_aggregates(self, records: Iterable[AttendanceRecord]) -> list[DateAggregate]:
        ordered = sorted(records, key=lambda r: r.date)

        names: dict[str, str] = {}
        first_seen: dict[str, date] = {}
        by_date: dict[date, list[AttendanceRecord]] = defaultdict(list)
        for r in ordered:
            names.setdefault(r.student_id, r.student_name)
            first_seen.setdefault(r.student_id, r.date)
            by_date[r.date].append(r)

        return [self._aggregate(d, by_date[d], first_seen, names) for d in sorted(by_date)]

    def _aggregate(
        self,
        day: date,
        day_records: Sequence[AttendanceRecord],
        first_seen: dict[str, date],
        names: dict[str, str],
    ) -> DateAggregate:
        enrolled = [sid for sid, first in first_seen.items() if first <= day]
        marked = {r.student_id for r in day_records}
        unmarked = [sid for sid in enrolled if sid not in marked]

        def of(status: AttendanceStatus) -> list[AttendanceRecord]:
            return [r for r in day_records if r.status == status]

        host = self._host_for(day_records)
        book = next((r for r in day_records if r.book_topic), day_records[0])
        context = dict(
            host_location=host,
            book_topic=book.book_topic,
            book_start_page=book.book_start_page,
            book_end_page=book.book_end_page,
        )

        if is_session_not_held(host) or any(not r.session_held for r in day_records):
            return DateAggregate(
                date=day,
                present_count=0,
                late_count=0,
                excused_count=len(enrolled),
                unexcused_absent_count=0,
                attendance_rate=0.0,
                excused_names=[ALL_STUDENTS_LABEL],
                session_held=False,
                **context,
            )

        present = of(AttendanceStatus.ON_TIME)
        late = of(AttendanceStatus.LATE)
        absent = of(AttendanceStatus.ABSENT)
        excused = of(AttendanceStatus.EXCUSED)

        accountable = len(enrolled) - len(excused)
        attended = len(present) + len(late)
        rate = attended / accountable * 100 if accountable > 0 else 0.0

        return DateAggregate(
            date=day,
            present_count=len(present),
            late_count=len(late),
            excused_count=len(excused),
            unexcused_absent_count=len(absent) + len(unmarked),
            attendance_rate=round(rate, 1),
            present_names=[r.student_name for r in present],
            late_names=[r.student_name for r in late],
            excused_names=[r.student_name for r in excused],
            absent_names=[r.student_name for r in absent] + [names[sid] for sid in unmarked],
            **context,
        )

    @staticmethod
    def _host_for(day_records: Sequence[AttendanceRecord]) -> Optional[str]:
        for r in day_records:
            if r.host_location:
                return r.host_location
        return None
