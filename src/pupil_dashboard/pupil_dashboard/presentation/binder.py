"""Turns aggregator output into what the page displays.

The browser script only writes `fields` into elements by
id, renders `positive` / `negative` rows, and hands `chart` to Chart.js. All
decisions about wording, row limits and colours are made here.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..attendance.model import BUCKET_FOR_STATUS, SESSIONS, AttendanceSummary, session_status
from ..behaviour.model import BehaviourSummary
from ..common.datetime_utils import format_iso_date, format_long_date, is_iso_date, parse_iso_date
from ..core.constants import COMPACT_CHART_DAYS, CUSTOM_RANGE_PREFILL_DAYS, FULL_DAY_UNITS
from ..core.enums import ChartView, Theme

NO_ATTENDANCE_MESSAGE = "No attendance data available for the selected date range"
NO_POSITIVE_MESSAGE = "No positive points during this period"
NO_NEGATIVE_MESSAGE = "No negative points during this period"

# element ids differ between the dashboard card and the attendance page
_ATTENDANCE_FIELD_IDS = {
    ChartView.COMPACT: ("present-days", "absent-days", "late-days"),
    ChartView.FULL: ("present-count", "absent-count", "late-count"),
}


@dataclass(frozen=True)
class SeriesColours:
    background: str
    border: str


@dataclass(frozen=True)
class ChartPalette:
    present: SeriesColours
    absent: SeriesColours
    late: SeriesColours
    text: str
    grid: str

    def to_dict(self) -> dict:
        return {
            "present": vars(self.present),
            "absent": vars(self.absent),
            "late": vars(self.late),
            "text": self.text,
            "grid": self.grid,
        }


_PALETTES = {
    Theme.LIGHT: ChartPalette(
        present=SeriesColours("rgba(40, 167, 69, 0.7)", "#28a745"),
        absent=SeriesColours("rgba(220, 53, 69, 0.7)", "#dc3545"),
        late=SeriesColours("rgba(255, 193, 7, 0.7)", "#ffc107"),
        text="#212529",
        grid="rgba(0, 0, 0, 0.1)",
    ),
    Theme.DARK: ChartPalette(
        present=SeriesColours("rgba(46, 204, 113, 0.7)", "#2ecc71"),
        absent=SeriesColours("rgba(231, 76, 60, 0.7)", "#e74c3c"),
        late=SeriesColours("rgba(241, 196, 15, 0.7)", "#f1c40f"),
        text="#f8f9fa",
        grid="rgba(255, 255, 255, 0.1)",
    ),
}

_SERIES = (("Present", "present"), ("Absent", "absent"), ("Late", "late"))


def chart_palette(theme) -> ChartPalette:
    return _PALETTES[Theme.parse(theme)]


def bind_attendance(summary: AttendanceSummary, view: ChartView = ChartView.COMPACT) -> dict[str, str]:
    present_id, absent_id, late_id = _ATTENDANCE_FIELD_IDS[view]
    return {
        "overall-attendance": f"{summary.percentage}%",
        present_id: f"{summary.present_days} days",
        absent_id: f"{summary.absent_days} days",
        late_id: f"{summary.late_days} days",
    }


def bind_behaviour(summary: BehaviourSummary) -> dict[str, Any]:
    return {
        "fields": {
            "total-positive-points": str(summary.total_positive),
            "total-negative-points": str(summary.total_negative),
        },
        "positive": [r.to_dict() for r in summary.positive],
        "negative": [r.to_dict() for r in summary.negative],
        "positiveEmpty": NO_POSITIVE_MESSAGE if not summary.positive else None,
        "negativeEmpty": NO_NEGATIVE_MESSAGE if not summary.negative else None,
    }


def bind_date_bounds(dates: Iterable[str], view: ChartView = ChartView.COMPACT) -> Optional[dict[str, Any]]:
    """min/max for the custom-range date inputs, from the dates the records cover.

    The full attendance page also pre-fills the inputs with the last 30 days
    ending on the latest recorded date.
    """
    known = sorted(d for d in dates if is_iso_date(d))
    if not known:
        return None
    bounds: dict[str, Any] = {"min": known[0], "max": known[-1]}
    if view == ChartView.FULL:
        latest = parse_iso_date(known[-1])
        start = max(latest - timedelta(days=CUSTOM_RANGE_PREFILL_DAYS), parse_iso_date(known[0]))
        bounds["prefill"] = {"start": format_iso_date(start), "end": known[-1]}
    return bounds


def half_day_counts(day: Mapping[str, Any] | None) -> dict[str, int]:
    counts = {"present": 0, "absent": 0, "late": 0}
    for session in SESSIONS:
        bucket = BUCKET_FOR_STATUS.get(session_status(day, session))
        if bucket:
            counts[bucket] += 1
    return counts


def chart_dates(records: Mapping[str, Any], dates: Sequence[str], view: ChartView) -> list[str]:
    with_records = [d for d in dates if records.get(d)]
    if view == ChartView.COMPACT:
        return with_records[-COMPACT_CHART_DAYS:]
    return with_records


def build_attendance_chart(
    records: Mapping[str, Any],
    dates: Sequence[str],
    *,
    view: ChartView = ChartView.COMPACT,
    theme=Theme.LIGHT,
) -> dict[str, Any]:
    """Chart.js config for a stacked bar chart of half-day sessions per date."""
    shown = chart_dates(records, dates, view)
    series = {key: [] for _, key in _SERIES}
    for iso in shown:
        counts = half_day_counts(records.get(iso))
        for key in series:
            series[key].append(counts[key])

    chart = {
        "type": "bar",
        "data": {
            "labels": [format_long_date(parse_iso_date(d)) for d in shown],
            "datasets": [
                {"label": label, "data": series[key], "borderWidth": 1}
                for label, key in _SERIES
            ],
        },
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "scales": {
                "x": {"stacked": True, "grid": {}, "ticks": {}},
                "y": {
                    "stacked": True,
                    "beginAtZero": True,
                    "max": FULL_DAY_UNITS,
                    "grid": {},
                    "ticks": {"stepSize": 1},
                    "tickLabels": {"0": "0", "1": "Half Day", "2": "Full Day"},
                },
            },
            "plugins": {"legend": {"labels": {}}},
        },
    }
    return recolor_chart(chart, theme)


def recolor_chart(chart: Mapping[str, Any], theme) -> dict[str, Any]:
    """Return a copy of `chart` with theme colours applied; data is left untouched."""
    palette = chart_palette(theme)
    out = copy.deepcopy(dict(chart))

    by_label = {label: getattr(palette, key) for label, key in _SERIES}
    for dataset in out["data"]["datasets"]:
        colours = by_label.get(dataset.get("label"))
        if colours:
            dataset["backgroundColor"] = colours.background
            dataset["borderColor"] = colours.border

    scales = out["options"]["scales"]
    for axis in ("x", "y"):
        scales[axis].setdefault("grid", {})["color"] = palette.grid
        scales[axis].setdefault("ticks", {})["color"] = palette.text
    out["options"]["plugins"]["legend"]["labels"]["color"] = palette.text
    return out
