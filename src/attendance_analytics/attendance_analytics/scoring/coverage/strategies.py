from __future__ import annotations

import math

from .base import CoverageStrategy


class SqrtCoverageStrategy(CoverageStrategy):
    """Gentle discount: 8 of 27 sessions keeps about 54%."""

    def factor(self, ratio: float) -> float:
        return math.sqrt(ratio)


class LinearCoverageStrategy(CoverageStrategy):
    def factor(self, ratio: float) -> float:
        return ratio


class LogCoverageStrategy(CoverageStrategy):
    """ln(1 + r(e - 1)): harsher for very low coverage, 1 at full coverage."""

    def factor(self, ratio: float) -> float:
        return math.log(1 + ratio * (math.e - 1))


class NoCoverageStrategy(CoverageStrategy):
    def factor(self, ratio: float) -> float:
        return 1.0
