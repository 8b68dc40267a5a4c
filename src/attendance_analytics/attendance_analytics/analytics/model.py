from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import TrendClassification
from ..scoring.trend import Trend


@dataclass(frozen=True)
class StudentScorecard:
    """Per-student result. Exporters and the UI consume this shape as-is."""

    rank: int
    student_id: str
    student_name: str

    present_count: int
    late_count: int
    absent_count: int
    excused_count: int
    unexcused_absent: int
    total_records: int
    days_covered: int
    effective_days: int

    attendance_rate: float
    quality_adjusted_rate: float
    punctuality_rate: float
    consistency_index: float
    consistency_percentage: float
    coverage_factor: float
    raw_weighted_score: float
    final_weighted_score: float

    trend: Trend
    weekly_change: float
    avg_rate: float
    min_rate: float
    max_rate: float

    late_bracket_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DateAggregate:
    date: date
    present_count: int
    late_count: int
    excused_count: int
    unexcused_absent_count: int
    attendance_rate: float

    present_names: list[str] = field(default_factory=list)
    late_names: list[str] = field(default_factory=list)
    excused_names: list[str] = field(default_factory=list)
    absent_names: list[str] = field(default_factory=list)

    host_location: Optional[str] = None
    session_held: bool = True
    book_topic: Optional[str] = None
    book_start_page: Optional[int] = None
    book_end_page: Optional[int] = None


@dataclass(frozen=True)
class HostRanking:
    rank: int
    host_location: str
    times_hosted: int
    dates: list[date]
    present: int
    late: int
    absent: int
    excused: int
    attendance_rate: float


@dataclass(frozen=True)
class AnalyticsSummary:
    total_students: int
    total_records: int
    held_dates: int
    not_held_dates: int
    average_attendance_rate: float
    average_weighted_score: float
    trend_counts: dict[TrendClassification, int]


@dataclass(frozen=True)
class AnalyticsReport:
    scorecards: list[StudentScorecard]
    dates: list[DateAggregate]
    hosts: list[HostRanking]
    summary: AnalyticsSummary
