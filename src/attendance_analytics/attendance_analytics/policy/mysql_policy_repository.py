from __future__ import annotations

import json
import logging
from typing import Optional

import mysql.connector

from ..core.exceptions import PolicyStoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import ScoringPolicy, policy_from_mapping, policy_to_mapping
from .repository import PolicyStore

logger = logging.getLogger(__name__)

_COLUMNS = (
    "config_name",
    "weight_quality",
    "weight_attendance",
    "weight_punctuality",
    "late_decay_constant",
    "late_minimum_credit",
    "late_null_estimate",
    "coverage_enabled",
    "coverage_method",
    "coverage_minimum",
    "perfect_attendance_bonus",
    "streak_bonus_per_week",
    "absence_penalty_multiplier",
    "late_brackets",
)


class MySQLPolicyStore(PolicyStore):
    """One saved policy row per owner in ``scoring_config``."""

    def __init__(self, conn_factory: DatabaseConnection, *, owner_id: str):
        self._conn_factory = conn_factory
        self._owner_id = str(owner_id)

    def load(self) -> Optional[ScoringPolicy]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {", ".join(_COLUMNS)}
                    FROM scoring_config
                    WHERE owner_id=%s
                    """,
                    (self._owner_id,),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise PolicyStoreError(f"Could not load scoring policy: {e}") from e

        if not row:
            return None
        return policy_from_mapping(row)

    def save(self, policy: ScoringPolicy) -> None:
        payload = policy_to_mapping(policy)
        payload["coverage_enabled"] = 1 if policy.coverage_enabled else 0
        payload["late_brackets"] = json.dumps(payload["late_brackets"])

        placeholders = ", ".join(["%s"] * (len(_COLUMNS) + 1))
        updates = ", ".join(f"{c}=VALUES({c})" for c in _COLUMNS)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO scoring_config(owner_id, {", ".join(_COLUMNS)})
                    VALUES({placeholders})
                    ON DUPLICATE KEY UPDATE {updates}
                    """,
                    (self._owner_id, *(payload[c] for c in _COLUMNS)),
                )
        except mysql.connector.Error as e:
            raise PolicyStoreError(f"Could not save scoring policy: {e}") from e
        logger.info("Saved scoring policy '%s' for owner %s", policy.config_name, self._owner_id)

    def reset(self) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM scoring_config WHERE owner_id=%s", (self._owner_id,))
        except mysql.connector.Error as e:
            raise PolicyStoreError(f"Could not reset scoring policy: {e}") from e
