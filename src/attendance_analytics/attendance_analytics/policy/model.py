from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_non_empty, require_positive, require_range
from ..core.constants import WEIGHT_SUM_TOLERANCE
from ..core.enums import CoverageMethod
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LateBracket:
    """Display-only lateness category. Never used in scoring math."""

    min_minutes: float
    max_minutes: float
    label: str
    color: str = ""

    def contains(self, minutes: float) -> bool:
        return self.min_minutes <= minutes <= self.max_minutes


DEFAULT_LATE_BRACKETS: tuple[LateBracket, ...] = (
    LateBracket(1, 5, "Minor", "green"),
    LateBracket(6, 15, "Moderate", "yellow"),
    LateBracket(16, 30, "Significant", "orange"),
    LateBracket(31, 60, "Severe", "red"),
    LateBracket(61, 999, "Very Late", "dark-red"),
)


@dataclass(frozen=True)
class ScoringPolicy:
    """Scoring configuration for one evaluation run.

    Weights are percentages and are expected to sum to 100. The engine never
    validates a policy itself; callers run ``validate_policy`` at the boundary.
    """

    weight_quality: float = 55.0
    weight_attendance: float = 35.0
    weight_punctuality: float = 10.0

    decay_constant: float = 43.3
    minimum_credit: float = 0.05
    unknown_late_estimate: float = 0.60

    coverage_enabled: bool = True
    coverage_method: CoverageMethod = CoverageMethod.SQRT
    coverage_minimum: float = 0.1

    perfect_attendance_bonus: float = 0.0
    streak_bonus_per_week: float = 0.0
    absence_penalty_multiplier: float = 1.0

    late_brackets: tuple[LateBracket, ...] = field(default=DEFAULT_LATE_BRACKETS)
    config_name: str = "Default Scoring"

    @property
    def weight_sum(self) -> float:
        return self.weight_quality + self.weight_attendance + self.weight_punctuality


DEFAULT_POLICY = ScoringPolicy()


def validate_policy(policy: ScoringPolicy) -> ScoringPolicy:
    require_non_empty(policy.config_name, "config_name")

    for name in ("weight_quality", "weight_attendance", "weight_punctuality"):
        require_range(getattr(policy, name), name, min_value=0, max_value=100)
    if abs(policy.weight_sum - 100) > WEIGHT_SUM_TOLERANCE:
        raise ValidationError(f"Weights must sum to 100% (currently {policy.weight_sum:g}%)")

    require_positive(policy.decay_constant, "decay_constant")
    require_range(policy.minimum_credit, "minimum_credit", min_value=0, max_value=1)
    require_range(policy.unknown_late_estimate, "unknown_late_estimate", min_value=0, max_value=1)

    if not isinstance(policy.coverage_method, CoverageMethod):
        raise ValidationError(f"Unknown coverage_method: {policy.coverage_method!r}")
    require_range(policy.coverage_minimum, "coverage_minimum", min_value=0, max_value=1)

    require_range(policy.perfect_attendance_bonus, "perfect_attendance_bonus", min_value=0)
    require_range(policy.streak_bonus_per_week, "streak_bonus_per_week", min_value=0)
    require_range(policy.absence_penalty_multiplier, "absence_penalty_multiplier", min_value=1.0)

    _validate_brackets(policy.late_brackets)
    return policy


def _validate_brackets(brackets: Sequence[LateBracket]) -> None:
    previous: Optional[LateBracket] = None
    for b in brackets:
        require_non_empty(b.label, "late bracket label")
        require_range(b.min_minutes, f"late bracket '{b.label}' min", min_value=0)
        require_range(b.max_minutes, f"late bracket '{b.label}' max", min_value=b.min_minutes)
        if previous is not None and b.min_minutes <= previous.max_minutes:
            raise ValidationError(f"Late bracket '{b.label}' overlaps or precedes '{previous.label}'")
        previous = b


def late_bracket_for(minutes: Optional[float], policy: ScoringPolicy) -> Optional[LateBracket]:
    """Display category for a lateness value (UI only)."""

    if minutes is None:
        return None
    for b in policy.late_brackets:
        if b.contains(minutes):
            return b
    return None


# ---------------------------------------------------------------------------
# Mapping conversion (storage rows / JSON payloads)
# ---------------------------------------------------------------------------


def _as_float(value: Any, fallback: float) -> float:
    # NUMERIC columns may come back as strings like "55.00".
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        return float(value) if not math.isnan(value) else fallback
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return fallback
        return parsed if not math.isnan(parsed) else fallback
    try:
        return float(value)  # Decimal
    except (TypeError, ValueError):
        return fallback


def _as_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if value == "true":
        return True
    if value == "false":
        return False
    return fallback


def _as_brackets(value: Any, fallback: tuple[LateBracket, ...]) -> tuple[LateBracket, ...]:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            logger.warning("Ignoring unparsable late_brackets payload")
            return fallback
    if not isinstance(value, list):
        return fallback

    out = []
    for item in value:
        if isinstance(item, LateBracket):
            out.append(item)
            continue
        if not isinstance(item, Mapping):
            return fallback
        out.append(
            LateBracket(
                min_minutes=_as_float(item.get("min"), 0.0),
                max_minutes=_as_float(item.get("max"), 0.0),
                label=str(item.get("name") or item.get("label") or ""),
                color=str(item.get("color") or ""),
            )
        )
    return tuple(out)


def policy_from_mapping(raw: Mapping[str, Any], *, base: ScoringPolicy = DEFAULT_POLICY) -> ScoringPolicy:
    """Build a policy from a stored row or a JSON payload.

    Missing or malformed fields fall back to ``base``. No range validation is
    performed here.
    """

    method_raw = raw.get("coverage_method")
    try:
        method = CoverageMethod(method_raw) if method_raw is not None else base.coverage_method
    except ValueError:
        method = base.coverage_method

    name = raw.get("config_name")

    return ScoringPolicy(
        weight_quality=_as_float(raw.get("weight_quality"), base.weight_quality),
        weight_attendance=_as_float(raw.get("weight_attendance"), base.weight_attendance),
        weight_punctuality=_as_float(raw.get("weight_punctuality"), base.weight_punctuality),
        decay_constant=_as_float(raw.get("late_decay_constant"), base.decay_constant),
        minimum_credit=_as_float(raw.get("late_minimum_credit"), base.minimum_credit),
        unknown_late_estimate=_as_float(raw.get("late_null_estimate"), base.unknown_late_estimate),
        coverage_enabled=_as_bool(raw.get("coverage_enabled"), base.coverage_enabled),
        coverage_method=method,
        coverage_minimum=_as_float(raw.get("coverage_minimum"), base.coverage_minimum),
        perfect_attendance_bonus=_as_float(raw.get("perfect_attendance_bonus"), base.perfect_attendance_bonus),
        streak_bonus_per_week=_as_float(raw.get("streak_bonus_per_week"), base.streak_bonus_per_week),
        absence_penalty_multiplier=_as_float(raw.get("absence_penalty_multiplier"), base.absence_penalty_multiplier),
        late_brackets=_as_brackets(raw.get("late_brackets"), base.late_brackets),
        config_name=name if isinstance(name, str) and name.strip() else base.config_name,
    )


def policy_to_mapping(policy: ScoringPolicy) -> dict[str, Any]:
    return {
        "config_name": policy.config_name,
        "weight_quality": policy.weight_quality,
        "weight_attendance": policy.weight_attendance,
        "weight_punctuality": policy.weight_punctuality,
        "late_decay_constant": policy.decay_constant,
        "late_minimum_credit": policy.minimum_credit,
        "late_null_estimate": policy.unknown_late_estimate,
        "coverage_enabled": policy.coverage_enabled,
        "coverage_method": policy.coverage_method.value,
        "coverage_minimum": policy.coverage_minimum,
        "perfect_attendance_bonus": policy.perfect_attendance_bonus,
        "streak_bonus_per_week": policy.streak_bonus_per_week,
        "absence_penalty_multiplier": policy.absence_penalty_multiplier,
        "late_brackets": [
            {"min": b.min_minutes, "max": b.max_minutes, "name": b.label, "color": b.color}
            for b in policy.late_brackets
        ],
    }
