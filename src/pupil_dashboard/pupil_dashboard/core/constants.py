"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Academic year starts on August 1st (month index 8 in Python dates).
ACADEMIC_YEAR_START_MONTH = 8

HALF_DAY = 0.5
FULL_DAY_UNITS = 2

POSITIVE_BREAKDOWN_LIMIT = 5
COMPACT_CHART_DAYS = 10

DEFAULT_PERIOD = "this-month"
DEFAULT_REMEMBER_ME_DAYS = 30
DEFAULT_SESSION_PING_SECONDS = 4 * 60
DEFAULT_REQUEST_TIMEOUT = 15

PUPIL_CODE_COOKIE = "pupilCode"
DATE_OF_BIRTH_COOKIE = "dateOfBirth"

API_DATE_FORMAT = "%Y-%m-%d"
CUSTOM_RANGE_PREFILL_DAYS = 30
