from __future__ import annotations

from abc import ABC, abstractmethod


class CoverageStrategy(ABC):
    """Strategy Pattern: map a coverage ratio (0..1) to a raw factor (0..1)."""

    @abstractmethod
    def factor(self, ratio: float) -> float:
        raise NotImplementedError
