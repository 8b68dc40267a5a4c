from __future__ import annotations

from dataclasses import dataclass

from .analytics.service import AnalyticsService
from .attendance.mysql_attendance_repository import MySQLAttendanceRecordRepository
from .database.connection import DBConfig, DatabaseConnection
from .policy.mysql_policy_repository import MySQLPolicyStore
from .policy.service import PolicyService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRecordRepository
    policy_store: MySQLPolicyStore

    policy_service: PolicyService
    analytics_service: AnalyticsService


def build_container(*, db_config: dict, policy_owner_id: str = "default") -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRecordRepository(conn)
    policy_store = MySQLPolicyStore(conn, owner_id=policy_owner_id)

    policy_service = PolicyService(policy_store)
    analytics_service = AnalyticsService(attendance_repo, policy_service)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        policy_store=policy_store,
        policy_service=policy_service,
        analytics_service=analytics_service,
    )
