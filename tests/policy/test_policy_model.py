from __future__ import annotations

import json
from dataclasses import replace
from decimal import Decimal

import pytest

from src.attendance_analytics.attendance_analytics.core.enums import CoverageMethod
from src.attendance_analytics.attendance_analytics.core.exceptions import ValidationError
from src.attendance_analytics.attendance_analytics.policy.model import (
    DEFAULT_LATE_BRACKETS,
    DEFAULT_POLICY,
    LateBracket,
    late_bracket_for,
    policy_from_mapping,
    policy_to_mapping,
    validate_policy,
)


def test_defaults_are_valid():
    assert DEFAULT_POLICY.weight_sum == 100
    assert validate_policy(DEFAULT_POLICY) is DEFAULT_POLICY


def test_weight_sum_tolerance():
    validate_policy(replace(DEFAULT_POLICY, weight_quality=55.4))

    with pytest.raises(ValidationError):
        validate_policy(replace(DEFAULT_POLICY, weight_quality=60))


@pytest.mark.parametrize(
    "changes",
    [
        {"weight_quality": -5, "weight_attendance": 95},
        {"decay_constant": 0},
        {"minimum_credit": 1.5},
        {"unknown_late_estimate": -0.1},
        {"coverage_minimum": 2},
        {"perfect_attendance_bonus": -1},
        {"absence_penalty_multiplier": 0.5},
        {"config_name": "  "},
    ],
)
def test_out_of_range_fields_are_rejected(changes):
    with pytest.raises(ValidationError):
        validate_policy(replace(DEFAULT_POLICY, **changes))


def test_overlapping_brackets_are_rejected():
    brackets = (LateBracket(1, 10, "A"), LateBracket(5, 20, "B"))

    with pytest.raises(ValidationError):
        validate_policy(replace(DEFAULT_POLICY, late_brackets=brackets))


def test_from_mapping_coerces_storage_types():
    policy = policy_from_mapping(
        {
            "config_name": "Spring",
            "weight_quality": "60.00",
            "weight_attendance": Decimal("30"),
            "weight_punctuality": 10,
            "late_decay_constant": "30",
            "coverage_enabled": 0,
            "coverage_method": "log",
            "late_brackets": json.dumps([{"min": 1, "max": 10, "name": "Late", "color": "red"}]),
        }
    )

    assert policy.config_name == "Spring"
    assert (policy.weight_quality, policy.weight_attendance, policy.weight_punctuality) == (60.0, 30.0, 10.0)
    assert policy.decay_constant == 30.0
    assert policy.coverage_enabled is False
    assert policy.coverage_method == CoverageMethod.LOG
    assert policy.late_brackets == (LateBracket(1, 10, "Late", "red"),)
    # Fields not present keep the defaults.
    assert policy.minimum_credit == DEFAULT_POLICY.minimum_credit


def test_from_mapping_falls_back_on_malformed_values():
    policy = policy_from_mapping(
        {
            "weight_quality": "abc",
            "coverage_method": "cubic",
            "coverage_enabled": "maybe",
            "late_brackets": "not json",
            "config_name": "",
        }
    )

    assert policy == DEFAULT_POLICY


def test_mapping_round_trip():
    custom = replace(DEFAULT_POLICY, weight_quality=50, weight_attendance=40, coverage_method=CoverageMethod.LINEAR)

    assert policy_from_mapping(policy_to_mapping(custom)) == custom


@pytest.mark.parametrize(
    "minutes, label",
    [(3, "Minor"), (10, "Moderate"), (30, "Significant"), (45, "Severe"), (200, "Very Late")],
)
def test_late_bracket_lookup(minutes, label):
    assert late_bracket_for(minutes, DEFAULT_POLICY).label == label


def test_late_bracket_lookup_without_match():
    assert late_bracket_for(None, DEFAULT_POLICY) is None
    assert late_bracket_for(0, DEFAULT_POLICY) is None
    assert len(DEFAULT_LATE_BRACKETS) == 5
