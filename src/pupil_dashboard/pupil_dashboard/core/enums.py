from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Status of a single AM/PM registration session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "SessionStatus":
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.UNKNOWN


class Period(str, Enum):
    """Named date-range tokens offered by the range selector."""

    SINCE_AUGUST = "since-august"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    THIS_WEEK = "this-week"
    CUSTOM = "custom"


class Theme(str, Enum):
    LIGHT = "light-theme"
    DARK = "dark-theme"

    @classmethod
    def parse(cls, value) -> "Theme":
        try:
            return cls(value)
        except ValueError:
            return cls.LIGHT


class ChartView(str, Enum):
    """Compact view is the dashboard card, full view is the attendance page."""

    COMPACT = "compact"
    FULL = "full"
