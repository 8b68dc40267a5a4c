from __future__ import annotations

import pytest

from src.attendance_analytics.attendance_analytics.core.enums import AttendanceStatus, TrendClassification
from src.attendance_analytics.attendance_analytics.scoring.trend import (
    FLAT_TREND,
    analyze_trend,
    classify,
    cumulative_rates,
)


def test_cumulative_rates_skip_excused_and_count_late():
    statuses = [AttendanceStatus.ON_TIME, AttendanceStatus.ABSENT, AttendanceStatus.EXCUSED, AttendanceStatus.LATE]

    assert cumulative_rates(statuses) == pytest.approx([100.0, 50.0, 200 / 3])


@pytest.mark.parametrize("rates", [[], [50.0]])
def test_too_few_points_is_flat(rates):
    assert analyze_trend(rates) == FLAT_TREND


def test_flat_series_is_stable():
    trend = analyze_trend([80.0] * 6)

    assert trend.slope == 0.0
    assert trend.r_squared == 1.0
    assert trend.classification == TrendClassification.STABLE


def test_rising_and_falling_series():
    up = analyze_trend([10, 20, 30, 40, 50, 60])
    down = analyze_trend([60, 50, 40, 30, 20, 10])

    assert up.slope == 10.0
    assert up.classification == TrendClassification.IMPROVING
    assert down.slope == -10.0
    assert down.classification == TrendClassification.DECLINING


def test_zigzag_is_volatile():
    trend = analyze_trend([50, 90, 50, 90, 50, 90])

    assert trend.r_squared < 0.3
    assert trend.classification == TrendClassification.VOLATILE


def test_only_recent_window_is_fitted():
    trend = analyze_trend([0.0] * 4 + [80.0] * 6)

    assert trend.slope == 0.0
    assert trend.classification == TrendClassification.STABLE


def test_classify_thresholds():
    assert classify(2.0, 0.9) == TrendClassification.STABLE
    assert classify(2.1, 0.9) == TrendClassification.IMPROVING
    assert classify(-2.1, 0.9) == TrendClassification.DECLINING
    assert classify(5.0, 0.29) == TrendClassification.VOLATILE
