from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import CONFIGURABLE_WEIGHT_SHARE, CONSISTENCY_WEIGHT, SESSIONS_PER_WEEK, WEEKLY_CHANGE_MIN_POINTS
from ..core.enums import AttendanceStatus
from ..policy.model import ScoringPolicy, late_bracket_for
from ..scoring.consistency import consistency_index
from ..scoring.coverage import coverage_factor
from ..scoring.late_credit import late_credit
from ..scoring.trend import analyze_trend, cumulative_rates
from .model import StudentScorecard


def _pct(numerator: float, denominator: float) -> float:
    return numerator / denominator * 100 if denominator > 0 else 0.0


def _late_bracket_counts(records: Iterable[AttendanceRecord], policy: ScoringPolicy) -> dict[str, int]:
    """Late arrivals per display bracket, in bracket order. Unknown minutes are not counted."""

    counts = {b.label: 0 for b in policy.late_brackets}
    for r in records:
        if r.status != AttendanceStatus.LATE:
            continue
        bracket = late_bracket_for(r.late_minutes, policy)
        if bracket is not None:
            counts[bracket.label] += 1
    return counts


@dataclass(frozen=True)
class ScoreBreakdown:
    """Intermediate (unrounded) score components for one student."""

    raw_weighted_score: float
    coverage_factor: float
    base_score: float
    bonus: float
    penalty: float
    final_weighted_score: float


class StudentScoreAggregator:
    """Per-student scoring: counts, rates, consistency, coverage, bonuses, trend.

    Input records must already be prepared (no NOT_ENROLLED, one record per
    student and date). ``total_sessions`` is the coverage denominator: the
    number of distinct held session dates in the whole dataset.
    """

    def blend(
        self,
        *,
        quality_rate: float,
        attendance_rate: float,
        punctuality_rate: float,
        consistency_percentage: float,
        policy: ScoringPolicy,
    ) -> float:
        # The three configured weights share 85%; consistency keeps a fixed 15%.
        configured = (
            policy.weight_quality * quality_rate
            + policy.weight_attendance * attendance_rate
            + policy.weight_punctuality * punctuality_rate
        ) / 100
        return CONFIGURABLE_WEIGHT_SHARE * configured + CONSISTENCY_WEIGHT * consistency_percentage

    def adjust(
        self,
        raw_score: float,
        *,
        effective_days: int,
        total_sessions: int,
        attendance_rate: float,
        unexcused_absent: int,
        total_present: int,
        policy: ScoringPolicy,
    ) -> ScoreBreakdown:
        factor = coverage_factor(effective_days, total_sessions, policy)
        base = raw_score * min(factor, 1.0)

        bonus = 0.0
        if attendance_rate >= 100:
            bonus += policy.perfect_attendance_bonus
        bonus += math.floor(total_present / SESSIONS_PER_WEEK) * policy.streak_bonus_per_week

        penalty = 0.0
        if unexcused_absent > 0:
            penalty = _pct(unexcused_absent, effective_days) * (policy.absence_penalty_multiplier - 1)

        final = min(100.0, max(0.0, base + bonus - penalty))
        return ScoreBreakdown(
            raw_weighted_score=raw_score,
            coverage_factor=factor,
            base_score=base,
            bonus=bonus,
            penalty=penalty,
            final_weighted_score=final,
        )

    def score_student(
        self,
        student_id: str,
        records: Sequence[AttendanceRecord],
        *,
        total_sessions: int,
        policy: ScoringPolicy,
    ) -> StudentScorecard:
        card, _ = self._score(student_id, records, total_sessions=total_sessions, policy=policy)
        return card

    def _score(
        self,
        student_id: str,
        records: Sequence[AttendanceRecord],
        *,
        total_sessions: int,
        policy: ScoringPolicy,
    ) -> tuple[StudentScorecard, ScoreBreakdown]:
        by_date = sorted(records, key=lambda r: r.date)
        statuses = [r.status for r in by_date]

        present = statuses.count(AttendanceStatus.ON_TIME)
        late = statuses.count(AttendanceStatus.LATE)
        absent = statuses.count(AttendanceStatus.ABSENT)
        excused = statuses.count(AttendanceStatus.EXCUSED)

        days_covered = len({r.date for r in by_date})
        effective_days = days_covered - excused
        total_present = present + late

        attendance_rate = _pct(total_present, effective_days)
        unexcused_absent = max(0, effective_days - total_present)

        quality_score = present + sum(
            late_credit(r.late_minutes, policy) for r in by_date if r.status == AttendanceStatus.LATE
        )
        quality_rate = _pct(quality_score, effective_days)
        punctuality_rate = _pct(present, total_present)

        pattern = [1 if s.is_present else 0 for s in statuses if s != AttendanceStatus.EXCUSED]
        consistency = consistency_index(pattern)

        raw = self.blend(
            quality_rate=quality_rate,
            attendance_rate=attendance_rate,
            punctuality_rate=punctuality_rate,
            consistency_percentage=consistency * 100,
            policy=policy,
        )
        breakdown = self.adjust(
            raw,
            effective_days=effective_days,
            total_sessions=total_sessions,
            attendance_rate=attendance_rate,
            unexcused_absent=unexcused_absent,
            total_present=total_present,
            policy=policy,
        )

        rates = cumulative_rates(statuses)
        weekly_change = rates[-1] - rates[-2] if len(rates) >= WEEKLY_CHANGE_MIN_POINTS else 0.0

        card = StudentScorecard(
            rank=0,
            student_id=student_id,
            student_name=by_date[0].student_name if by_date else "",
            present_count=present,
            late_count=late,
            absent_count=absent,
            excused_count=excused,
            unexcused_absent=unexcused_absent,
            total_records=len(by_date),
            days_covered=days_covered,
            effective_days=effective_days,
            attendance_rate=round(attendance_rate, 1),
            quality_adjusted_rate=round(quality_rate, 1),
            punctuality_rate=round(punctuality_rate, 1),
            consistency_index=consistency,
            consistency_percentage=round(consistency * 100, 1),
            coverage_factor=round(breakdown.coverage_factor, 3),
            raw_weighted_score=round(breakdown.raw_weighted_score, 1),
            final_weighted_score=round(breakdown.final_weighted_score, 1),
            trend=analyze_trend(rates),
            weekly_change=round(weekly_change, 1),
            avg_rate=round(sum(rates) / len(rates), 1) if rates else 0.0,
            min_rate=round(min(rates), 1) if rates else 0.0,
            max_rate=round(max(rates), 1) if rates else 0.0,
            late_bracket_counts=_late_bracket_counts(by_date, policy),
        )
        return card, breakdown

    def build_scorecards(
        self,
        records: Iterable[AttendanceRecord],
        *,
        total_sessions: int,
        policy: ScoringPolicy,
    ) -> list[StudentScorecard]:
        by_student: dict[str, list[AttendanceRecord]] = defaultdict(list)
        for r in records:
            by_student[r.student_id].append(r)

        scored = [
            self._score(sid, recs, total_sessions=total_sessions, policy=policy)
            for sid, recs in by_student.items()
        ]
        # Rank on the unrounded score; the card only carries the display value.
        scored.sort(key=lambda cb: (-cb[1].final_weighted_score, cb[0].student_id))
        return [replace(card, rank=i) for i, (card, _) in enumerate(scored, start=1)]
