from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Normalized attendance outcome for one student on one session date."""

    ON_TIME = "on time"
    LATE = "late"
    ABSENT = "absent"
    EXCUSED = "excused"
    NOT_ENROLLED = "not enrolled"

    @property
    def is_present(self) -> bool:
        return self in (AttendanceStatus.ON_TIME, AttendanceStatus.LATE)


class CoverageMethod(str, Enum):
    """How the coverage factor scales with the share of the term attended."""

    SQRT = "sqrt"
    LINEAR = "linear"
    LOG = "log"
    NONE = "none"


class TrendClassification(str, Enum):
    STABLE = "STABLE"
    IMPROVING = "IMPROVING"
    DECLINING = "DECLINING"
    VOLATILE = "VOLATILE"
