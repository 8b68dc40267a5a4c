"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Host location sentinel: the session did not take place on that date.
SESSION_NOT_HELD = "SESSION_NOT_HELD"
ALL_STUDENTS_LABEL = "All Students"
UNKNOWN_STUDENT_NAME = "Unknown"

# Consistency is blended in with a fixed weight; the three configurable
# weights share the remainder.
CONSISTENCY_WEIGHT = 0.15
CONFIGURABLE_WEIGHT_SHARE = 1.0 - CONSISTENCY_WEIGHT

WEIGHT_SUM_TOLERANCE = 0.5

TREND_WINDOW = 6
TREND_VOLATILE_R_SQUARED = 0.3
TREND_SLOPE_THRESHOLD = 2.0
WEEKLY_CHANGE_MIN_POINTS = 3

CONSISTENCY_DAMPENING_ABSENCES = 5
SESSIONS_PER_WEEK = 5

DEFAULT_DECAY_PREVIEW_MINUTES = 120
DEFAULT_DECAY_PREVIEW_POINTS = 50
DEFAULT_COVERAGE_PREVIEW_SESSIONS = 30
DEFAULT_COVERAGE_PREVIEW_POINTS = 30

DEFAULT_REPORT_DAYS = 365
