from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..common.datetime_utils import format_iso_date, format_short_date
from ..core.constants import ACADEMIC_YEAR_START_MONTH
from ..core.enums import Period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar window. Ordering is validated by the caller, not here."""

    start: date
    end: date

    @property
    def start_iso(self) -> str:
        return format_iso_date(self.start)

    @property
    def end_iso(self) -> str:
        return format_iso_date(self.end)

    def contains(self, iso_date: str) -> bool:
        # YYYY-MM-DD strings sort in calendar order.
        return self.start_iso <= iso_date <= self.end_iso

    def as_api(self) -> dict[str, str]:
        return {"from": self.start_iso, "to": self.end_iso}

    def caption(self) -> str:
        return f"{format_short_date(self.start)} - {format_short_date(self.end)}"


def _as_date(now: Union[date, datetime]) -> date:
    return now.date() if isinstance(now, datetime) else now


def academic_year_start(now: Union[date, datetime]) -> date:
    today = _as_date(now)
    year = today.year if today.month >= ACADEMIC_YEAR_START_MONTH else today.year - 1
    return date(year, ACADEMIC_YEAR_START_MONTH, 1)


def _this_month(today: date) -> DateRange:
    return DateRange(start=today.replace(day=1), end=today)


def _last_month(today: date) -> DateRange:
    last_day = today.replace(day=1) - timedelta(days=1)
    return DateRange(start=last_day.replace(day=1), end=last_day)


def _this_week(today: date) -> DateRange:
    # isoweekday(): Monday=1 ... Sunday=7
    monday = today - timedelta(days=today.isoweekday() - 1)
    return DateRange(start=monday, end=today)


def _since_august(today: date) -> DateRange:
    return DateRange(start=academic_year_start(today), end=today)


_RESOLVERS = {
    Period.SINCE_AUGUST: _since_august,
    Period.THIS_MONTH: _this_month,
    Period.LAST_MONTH: _last_month,
    Period.THIS_WEEK: _this_week,
}


def resolve_period(
    token: Optional[str],
    now: Union[date, datetime],
    *,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> DateRange:
    """Map a period token to a concrete inclusive range.

    Unknown tokens and an incomplete custom range fall back to this month.
    """
    today = _as_date(now)

    try:
        period = Period(token)
    except ValueError:
        logger.debug("Unknown period %r, defaulting to this-month", token)
        period = Period.THIS_MONTH

    if period == Period.CUSTOM:
        if custom_start and custom_end:
            return DateRange(start=custom_start, end=custom_end)
        period = Period.THIS_MONTH

    return _RESOLVERS[period](today)
