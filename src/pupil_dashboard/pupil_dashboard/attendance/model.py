from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import SessionStatus

SESSIONS = ("AM", "PM")

# excused absences count against attendance like any other absence
BUCKET_FOR_STATUS = {
    SessionStatus.PRESENT: "present",
    SessionStatus.ABSENT: "absent",
    SessionStatus.EXCUSED: "absent",
    SessionStatus.LATE: "late",
}


def session_status(day: Optional[Mapping[str, Any]], session: str) -> Optional[SessionStatus]:
    """Status of one session of a day entry, or None when the session is missing."""
    if not isinstance(day, Mapping):
        return None
    entry = day.get(session)
    if not isinstance(entry, Mapping) or entry.get("status") is None:
        return None
    return SessionStatus.parse(entry["status"])


@dataclass(frozen=True)
class HalfDayTally:
    present: float = 0.0
    absent: float = 0.0
    late: float = 0.0

    @property
    def total(self) -> float:
        return self.present + self.absent + self.late


@dataclass(frozen=True)
class AttendanceSummary:
    """Derived view of a filtered attendance map; always recomputed, never stored."""

    present_days: int
    absent_days: int
    late_days: int
    percentage: int
    tally: HalfDayTally
    dates: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.dates

    def to_dict(self) -> dict:
        return {
            "present": self.present_days,
            "absent": self.absent_days,
            "late": self.late_days,
            "percentage": self.percentage,
            "halfDays": {
                "present": self.tally.present,
                "absent": self.tally.absent,
                "late": self.tally.late,
            },
            "dates": list(self.dates),
        }
