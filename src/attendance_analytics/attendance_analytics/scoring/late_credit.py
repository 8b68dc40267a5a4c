from __future__ import annotations

import math
from typing import Optional

from ..core.constants import DEFAULT_DECAY_PREVIEW_MINUTES, DEFAULT_DECAY_PREVIEW_POINTS
from ..policy.model import ScoringPolicy


def late_credit(late_minutes: Optional[float], policy: ScoringPolicy) -> float:
    """Credit (0..1) earned by a late arrival.

    Exponential decay ``exp(-t / tau)`` with a floor at ``policy.minimum_credit``.
    With tau = 43.3 a student 30 minutes late keeps about half the credit.
    A late record without minutes gets ``policy.unknown_late_estimate``.
    """

    if late_minutes is None:
        return policy.unknown_late_estimate
    if late_minutes <= 0:
        return 1.0
    return max(policy.minimum_credit, math.exp(-late_minutes / policy.decay_constant))


def decay_curve(
    policy: ScoringPolicy,
    *,
    max_minutes: float = DEFAULT_DECAY_PREVIEW_MINUTES,
    points: int = DEFAULT_DECAY_PREVIEW_POINTS,
) -> list[tuple[int, float]]:
    """Preview points ``(minutes, credit %)`` for the configuration screen."""

    curve = []
    for i in range(points + 1):
        minutes = (i / points) * max_minutes if points else 0.0
        credit = late_credit(minutes, policy) * 100
        curve.append((int(round(minutes)), round(credit, 1)))
    return curve
