from __future__ import annotations

from typing import Optional, Protocol

from .model import ScoringPolicy


class PolicyStore(Protocol):
    """Persistence capability for the saved scoring policy."""

    def load(self) -> Optional[ScoringPolicy]:
        """Return the saved policy, or None when nothing has been saved yet."""

        raise NotImplementedError

    def save(self, policy: ScoringPolicy) -> None:
        raise NotImplementedError

    def reset(self) -> None:
        """Forget the saved policy so callers fall back to defaults."""

        raise NotImplementedError


class InMemoryPolicyStore(PolicyStore):
    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self._policy = policy

    def load(self) -> Optional[ScoringPolicy]:
        return self._policy

    def save(self, policy: ScoringPolicy) -> None:
        self._policy = policy

    def reset(self) -> None:
        self._policy = None
