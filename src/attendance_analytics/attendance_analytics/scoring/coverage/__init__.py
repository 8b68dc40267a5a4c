from __future__ import annotations

from ...core.constants import DEFAULT_COVERAGE_PREVIEW_POINTS, DEFAULT_COVERAGE_PREVIEW_SESSIONS
from ...policy.model import ScoringPolicy
from .factory import CoverageStrategyFactory

_factory = CoverageStrategyFactory()


def coverage_factor(effective_days: float, total_sessions: float, policy: ScoringPolicy) -> float:
    """Discount (``policy.coverage_minimum``..1) for students seen on few of the term's sessions."""

    if not policy.coverage_enabled or total_sessions <= 0:
        return 1.0

    ratio = min(max(effective_days / total_sessions, 0.0), 1.0)
    factor = _factory.for_method(policy.coverage_method).factor(ratio)
    return min(1.0, max(policy.coverage_minimum, factor))


def coverage_curve(
    policy: ScoringPolicy,
    *,
    total_sessions: int = DEFAULT_COVERAGE_PREVIEW_SESSIONS,
    points: int = DEFAULT_COVERAGE_PREVIEW_POINTS,
) -> list[tuple[int, float]]:
    """Preview points ``(days, factor %)`` for the configuration screen."""

    curve = []
    for i in range(points + 1):
        days = int(round((i / points) * total_sessions)) if points else 0
        factor = coverage_factor(days, total_sessions, policy) * 100
        curve.append((days, round(factor, 1)))
    return curve
