from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.rounding import round_half_up
from ..core.constants import HALF_DAY
from ..core.exceptions import ValidationError
from ..periods.resolver import DateRange
from .model import BUCKET_FOR_STATUS, SESSIONS, AttendanceSummary, HalfDayTally, session_status


def dates_in_range(dates: Iterable[str], date_range: DateRange) -> list[str]:
    return [d for d in dates if isinstance(d, str) and date_range.contains(d)]


def tally_half_days(records: Mapping[str, Any], dates: Iterable[str]) -> HalfDayTally:
    counts = {"present": 0.0, "absent": 0.0, "late": 0.0}
    for iso in dates:
        day = records.get(iso)
        for session in SESSIONS:
            bucket = BUCKET_FOR_STATUS.get(session_status(day, session))
            if bucket:
                counts[bucket] += HALF_DAY
    return HalfDayTally(**counts)


def attendance_percentage(tally: HalfDayTally) -> int:
    if tally.total <= 0:
        return 0
    return round_half_up(tally.present / tally.total * 100)


def summarize_attendance(
    records: Mapping[str, Any],
    date_range: DateRange,
    dates: Optional[Sequence[str]] = None,
) -> AttendanceSummary:
    """Reduce a per-date AM/PM map to day counts and a percentage for one range.

    Every counted session is worth half a day. Day counts round half-up, the
    percentage is computed from the unrounded half-day sums.
    """
    candidates = dates if dates is not None else sorted(records)
    in_range = dates_in_range(candidates, date_range)
    tally = tally_half_days(records, in_range)

    return AttendanceSummary(
        present_days=round_half_up(tally.present),
        absent_days=round_half_up(tally.absent),
        late_days=round_half_up(tally.late),
        percentage=attendance_percentage(tally),
        tally=tally,
        dates=tuple(in_range),
    )


def require_attendance_payload(payload: Any) -> tuple[Mapping[str, Any], list[str]]:
    """Pull `data` and `meta.dates` out of an upstream attendance document."""
    if not isinstance(payload, Mapping):
        raise ValidationError("Invalid attendance data structure")
    data = payload.get("data")
    meta = payload.get("meta")
    if not isinstance(data, Mapping) or not isinstance(meta, Mapping) or not isinstance(meta.get("dates"), list):
        raise ValidationError("Invalid attendance data structure")
    return data, list(meta["dates"])


def filter_attendance(payload: Mapping[str, Any], date_range: DateRange) -> dict:
    """Copy of the upstream document restricted to the range."""
    data, dates = require_attendance_payload(payload)
    in_range = dates_in_range(dates, date_range)
    return {
        "data": {d: data[d] for d in in_range if d in data},
        "meta": {**payload["meta"], "dates": in_range},
    }
