from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.exceptions import PolicyStoreError
from ..scoring.coverage import coverage_curve
from ..scoring.late_credit import decay_curve
from .model import DEFAULT_POLICY, ScoringPolicy, policy_from_mapping, validate_policy
from .repository import PolicyStore

logger = logging.getLogger(__name__)


class PolicyService:
    def __init__(self, store: PolicyStore):
        self._store = store

    def load_policy(self) -> ScoringPolicy:
        """Saved policy, or the defaults when nothing is saved or the store is down."""

        try:
            saved = self._store.load()
        except PolicyStoreError as e:
            logger.warning("Falling back to default scoring policy: %s", e)
            return DEFAULT_POLICY
        return saved if saved is not None else DEFAULT_POLICY

    def save_policy(self, payload: Mapping[str, Any]) -> ScoringPolicy:
        policy = validate_policy(policy_from_mapping(payload, base=self.load_policy()))
        self._store.save(policy)
        return policy

    def reset_policy(self) -> ScoringPolicy:
        self._store.reset()
        logger.info("Scoring policy reset to defaults")
        return DEFAULT_POLICY

    def preview(self, policy: ScoringPolicy | None = None) -> dict[str, list[tuple[int, float]]]:
        policy = policy or self.load_policy()
        return {
            "decay": decay_curve(policy),
            "coverage": coverage_curve(policy),
        }
