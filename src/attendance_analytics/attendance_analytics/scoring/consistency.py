from __future__ import annotations

from typing import Sequence

from ..core.constants import CONSISTENCY_DAMPENING_ABSENCES


def absence_streaks(pattern: Sequence[int]) -> list[int]:
    """Lengths of maximal runs of consecutive absences (0s)."""

    streaks: list[int] = []
    current = 0
    for value in pattern:
        if value == 0:
            current += 1
        elif current:
            streaks.append(current)
            current = 0
    if current:
        streaks.append(current)
    return streaks


def consistency_index(pattern: Sequence[int]) -> float:
    """Regularity score (0..1) of a presence pattern (1 = present, 0 = absent).

    Excused days must already be removed. Scattered single absences score high,
    one long block of absences scores low; the raw attendance rate does not
    enter the formula. With few absences the result is pulled towards 1.
    """

    if len(pattern) <= 1:
        return float(pattern[0]) if pattern else 0.0

    total_absent = sum(1 for v in pattern if v == 0)
    if total_absent == 0:
        return 1.0
    if total_absent == len(pattern):
        return 0.0

    streaks = absence_streaks(pattern)
    longest = max(streaks)

    if total_absent > 1:
        scatter_ratio = len(streaks) / total_absent
        floor = 1 / total_absent
        normalized_scatter = (scatter_ratio - floor) / (1 - floor)
        streak_penalty = 1 - (longest - 1) / (total_absent - 1)
    else:
        normalized_scatter = 1.0
        streak_penalty = 1.0

    raw = 0.5 * normalized_scatter + 0.5 * streak_penalty

    dampening = min(total_absent / CONSISTENCY_DAMPENING_ABSENCES, 1.0)
    consistency = raw * dampening + (1 - dampening)

    return round(min(max(consistency, 0.0), 1.0), 2)
