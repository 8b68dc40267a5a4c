from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..core.constants import TREND_SLOPE_THRESHOLD, TREND_VOLATILE_R_SQUARED, TREND_WINDOW
from ..core.enums import AttendanceStatus, TrendClassification


@dataclass(frozen=True)
class Trend:
    slope: float
    r_squared: float
    classification: TrendClassification


_SS_EPSILON = 1e-9

FLAT_TREND = Trend(slope=0.0, r_squared=1.0, classification=TrendClassification.STABLE)


def cumulative_rates(statuses: Iterable[AttendanceStatus]) -> list[float]:
    """Running attendance percentage after each accountable day.

    ``statuses`` must be in date order. Excused days are skipped; late counts as present.
    """

    rates: list[float] = []
    present = 0
    total = 0
    for status in statuses:
        if status in (AttendanceStatus.EXCUSED, AttendanceStatus.NOT_ENROLLED):
            continue
        total += 1
        if status.is_present:
            present += 1
        rates.append(present / total * 100)
    return rates


def classify(slope: float, r_squared: float) -> TrendClassification:
    if r_squared < TREND_VOLATILE_R_SQUARED:
        return TrendClassification.VOLATILE
    if slope > TREND_SLOPE_THRESHOLD:
        return TrendClassification.IMPROVING
    if slope < -TREND_SLOPE_THRESHOLD:
        return TrendClassification.DECLINING
    return TrendClassification.STABLE


def analyze_trend(rates: Sequence[float], *, window: int = TREND_WINDOW) -> Trend:
    """Least-squares trend over the most recent ``window`` cumulative rates."""

    recent = list(rates)[-window:]
    n = len(recent)
    if n < 2:
        return FLAT_TREND

    xs = range(1, n + 1)
    x_mean = (n + 1) / 2
    y_mean = sum(recent) / n

    numerator = sum((x - x_mean) * (y - y_mean) for x, y in zip(xs, recent))
    denominator = sum((x - x_mean) ** 2 for x in xs)
    slope = numerator / denominator if denominator else 0.0
    intercept = y_mean - slope * x_mean

    ss_res = sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, recent))
    ss_tot = sum((y - y_mean) ** 2 for y in recent)
    # Float noise on a constant series must not read as a poor fit.
    r_squared = 1 - ss_res / ss_tot if ss_tot > _SS_EPSILON else 1.0

    return Trend(
        slope=round(slope, 1),
        r_squared=round(r_squared, 2),
        classification=classify(slope, r_squared),
    )
