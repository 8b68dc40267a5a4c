from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import CoverageMethod
from .base import CoverageStrategy
from .strategies import LinearCoverageStrategy, LogCoverageStrategy, NoCoverageStrategy, SqrtCoverageStrategy


@dataclass
class CoverageStrategyFactory:
    """Factory Pattern: choose the coverage strategy for a configured method."""

    def for_method(self, method: CoverageMethod) -> CoverageStrategy:
        if method == CoverageMethod.LINEAR:
            return LinearCoverageStrategy()
        if method == CoverageMethod.LOG:
            return LogCoverageStrategy()
        if method == CoverageMethod.NONE:
            return NoCoverageStrategy()
        return SqrtCoverageStrategy()
