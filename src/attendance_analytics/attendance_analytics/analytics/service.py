from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.classifier import prepare_records
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRecordRepository
from ..common.validators import require_date_range
from ..core.enums import TrendClassification
from ..policy.model import ScoringPolicy
from ..policy.service import PolicyService
from .date_aggregator import SessionDateAggregator
from .host_ranking import rank_hosts
from .model import AnalyticsReport, AnalyticsSummary, DateAggregate, StudentScorecard
from .student_aggregator import StudentScoreAggregator

logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(
        self,
        attendance: AttendanceRecordRepository,
        policies: PolicyService,
        *,
        students: Optional[StudentScoreAggregator] = None,
        dates: Optional[SessionDateAggregator] = None,
    ):
        self._attendance = attendance
        self._policies = policies
        self._students = students or StudentScoreAggregator()
        self._dates = dates or SessionDateAggregator()

    def evaluate(self, records: Sequence[AttendanceRecord], policy: ScoringPolicy) -> AnalyticsReport:
        prepared = prepare_records(records)
        # Coverage is measured against every observed session date, cancelled ones included.
        all_dates = {r.date for r in prepared}

        scorecards = self._students.build_scorecards(prepared, total_sessions=len(all_dates), policy=policy)
        dates = self._dates.build_date_aggregates(prepared)
        hosts = rank_hosts(dates)

        return AnalyticsReport(
            scorecards=scorecards,
            dates=dates,
            hosts=hosts,
            summary=self._summarize(scorecards, dates, total_records=len(prepared)),
        )

    def evaluate_range(self, start: date, end: date, session_id: Optional[str] = None) -> AnalyticsReport:
        require_date_range(start, end)
        records = self._attendance.get_records(start_date=start, end_date=end, session_id=session_id)
        policy = self._policies.load_policy()
        logger.info(
            "Evaluating %d records (%s..%s, session=%s) with policy '%s'",
            len(records),
            start,
            end,
            session_id or "*",
            policy.config_name,
        )
        return self.evaluate(records, policy)

    @staticmethod
    def _summarize(
        scorecards: Sequence[StudentScorecard],
        dates: Sequence[DateAggregate],
        *,
        total_records: int,
    ) -> AnalyticsSummary:
        trend_counts = {c: 0 for c in TrendClassification}
        for card in scorecards:
            trend_counts[card.trend.classification] += 1

        n = len(scorecards)
        not_held = sum(1 for d in dates if not d.session_held)
        return AnalyticsSummary(
            total_students=n,
            total_records=total_records,
            held_dates=len(dates) - not_held,
            not_held_dates=not_held,
            average_attendance_rate=round(sum(c.attendance_rate for c in scorecards) / n, 1) if n else 0.0,
            average_weighted_score=round(sum(c.final_weighted_score for c in scorecards) / n, 1) if n else 0.0,
            trend_counts=trend_counts,
        )
