from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..announcements.cursor import AnnouncementCursor
from ..attendance.aggregator import filter_attendance, require_attendance_payload, summarize_attendance
from ..behaviour.aggregator import behaviour_tallies, summarize_behaviour
from ..common.datetime_utils import format_iso_date, now_local
from ..common.validators import require_ordered_range
from ..core.enums import ChartView, Theme
from ..core.exceptions import DomainError, RecordsError
from ..periods.resolver import DateRange, academic_year_start, resolve_period
from ..presentation.binder import (
    NO_ATTENDANCE_MESSAGE,
    bind_attendance,
    bind_behaviour,
    bind_date_bounds,
    build_attendance_chart,
)
from ..records.client import RecordsClient
from .store import DashboardStore

logger = logging.getLogger(__name__)

ATTENDANCE_ERROR = "Failed to load attendance data"
BEHAVIOUR_ERROR = "Failed to load achievement data"
ANNOUNCEMENTS_ERROR = "Failed to fetch announcements data"


@dataclass
class SummaryRequest:
    period: Optional[str] = None
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None
    view: ChartView = ChartView.COMPACT
    theme: Theme = Theme.LIGHT


@dataclass
class FetchResult:
    store: DashboardStore
    token: int
    attendance: Optional[dict[str, Any]] = None
    behaviour: Optional[dict[str, Any]] = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def current(self) -> bool:
        """False once a newer refresh has started on the same store."""
        return self.store.tokens.is_current(self.token)


class DashboardService:
    """Use case: fetch, aggregate and bind the dashboard for one date range.

    One DashboardStore is kept per pupil, so overlapping refreshes from the
    same pupil share a token counter and older results never replace newer
    ones in the store.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_local):
        self._clock = clock
        self._stores: dict[str, DashboardStore] = {}
        self._stores_lock = threading.Lock()

    def store_for(self, pupil_code: str) -> DashboardStore:
        with self._stores_lock:
            store = self._stores.get(pupil_code)
            if store is None:
                store = self._stores[pupil_code] = DashboardStore()
            return store

    def resolve_range(self, req: SummaryRequest) -> DateRange:
        date_range = resolve_period(
            req.period,
            self._clock(),
            custom_start=req.custom_start,
            custom_end=req.custom_end,
        )
        require_ordered_range(date_range.start, date_range.end)
        return date_range

    def school_year_window(self) -> DateRange:
        """The window attendance is always fetched for: August 1st through today."""
        today = self._clock().date()
        return DateRange(start=academic_year_start(today), end=today)

    def fetch(self, client: RecordsClient, date_range: DateRange, store: Optional[DashboardStore] = None) -> FetchResult:
        """Fetch attendance and behaviour concurrently, then join."""
        store = store if store is not None else DashboardStore()
        token = store.begin_refresh()
        year = self.school_year_window()
        result = FetchResult(store=store, token=token)

        with ThreadPoolExecutor(max_workers=2) as pool:
            attendance_f = pool.submit(client.get_attendance, from_date=year.start_iso, to_date=year.end_iso)
            behaviour_f = pool.submit(client.get_behaviour, from_date=date_range.start_iso, to_date=date_range.end_iso)

            try:
                result.attendance = attendance_f.result()
                store.accept_attendance(token, result.attendance)
            except RecordsError:
                logger.exception("Error fetching attendance")
                result.errors["attendance"] = ATTENDANCE_ERROR

            try:
                result.behaviour = behaviour_f.result()
                store.accept_behaviour(token, result.behaviour)
            except RecordsError:
                logger.exception("Error fetching behaviour")
                result.errors["behaviour"] = BEHAVIOUR_ERROR

        if not result.current:
            logger.debug("Refresh %s superseded; store left unchanged", token)
        return result

    def summary(self, client: RecordsClient, req: SummaryRequest, store: Optional[DashboardStore] = None) -> dict[str, Any]:
        date_range = self.resolve_range(req)
        fetched = self.fetch(client, date_range, store)

        out: dict[str, Any] = {
            "range": {"start": date_range.start_iso, "end": date_range.end_iso, "caption": date_range.caption()},
            "attendance": None,
            "behaviour": None,
            "errors": dict(fetched.errors),
            "stale": not fetched.current,
        }

        if fetched.attendance is not None:
            try:
                out["attendance"] = self._attendance_section(fetched.attendance, date_range, req)
            except DomainError as e:
                logger.warning("Unusable attendance payload: %s", e)
                out["errors"]["attendance"] = ATTENDANCE_ERROR

        if fetched.behaviour is not None:
            try:
                positive, negative = behaviour_tallies(fetched.behaviour)
                out["behaviour"] = bind_behaviour(summarize_behaviour(positive, negative))
            except DomainError as e:
                logger.warning("Unusable behaviour payload: %s", e)
                out["errors"]["behaviour"] = BEHAVIOUR_ERROR

        return out

    def _attendance_section(self, payload: dict[str, Any], date_range: DateRange, req: SummaryRequest) -> dict[str, Any]:
        _, dates = require_attendance_payload(payload)
        filtered = filter_attendance(payload, date_range)
        summary = summarize_attendance(filtered["data"], date_range, filtered["meta"]["dates"])
        meta = payload.get("meta") or {}

        section: dict[str, Any] = {
            "stats": summary.to_dict(),
            "fields": bind_attendance(summary, req.view),
            "chart": build_attendance_chart(filtered["data"], summary.dates, view=req.view, theme=req.theme),
            "message": NO_ATTENDANCE_MESSAGE if summary.is_empty else None,
            "bounds": bind_date_bounds(dates, req.view),
        }
        if req.view == ChartView.FULL:
            section["fields"]["date-range"] = date_range.caption()
            section["fields"]["since-august"] = f"{meta.get('percentage_singe_august', meta.get('percentage', 0))}%"
        return section

    def announcements(self, client: RecordsClient, index: int = 0, store: Optional[DashboardStore] = None) -> dict[str, Any]:
        """Current announcement plus the whole normalised list for paging in the page."""
        payload = client.get_announcements()
        items = payload.get("data") if isinstance(payload, dict) else None
        items = items if isinstance(items, list) else []
        cursor = store.set_announcements(items, index) if store is not None else AnnouncementCursor(items, index)
        return {**cursor.view(), "announcements": cursor.entries()}

    def today_iso(self) -> str:
        return format_iso_date(self._clock().date())
