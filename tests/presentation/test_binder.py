from datetime import date, timedelta

from src.pupil_dashboard.pupil_dashboard.attendance.aggregator import summarize_attendance
from src.pupil_dashboard.pupil_dashboard.behaviour.aggregator import summarize_behaviour
from src.pupil_dashboard.pupil_dashboard.core.enums import ChartView
from src.pupil_dashboard.pupil_dashboard.periods.resolver import DateRange
from src.pupil_dashboard.pupil_dashboard.presentation.binder import (
    NO_NEGATIVE_MESSAGE,
    NO_POSITIVE_MESSAGE,
    bind_attendance,
    bind_behaviour,
    bind_date_bounds,
    build_attendance_chart,
    chart_palette,
    recolor_chart,
)

MARCH = DateRange(start=date(2024, 3, 1), end=date(2024, 3, 15))


def _fortnight():
    start = date(2024, 3, 1)
    records = {}
    for i in range(14):
        iso = (start + timedelta(days=i)).isoformat()
        records[iso] = {"AM": {"status": "present"}, "PM": {"status": "late" if i % 2 else "absent"}}
    return records


def test_bind_attendance_compact_ids(attendance_payload):
    summary = summarize_attendance(attendance_payload["data"], MARCH)

    assert bind_attendance(summary) == {
        "overall-attendance": "75%",
        "present-days": "3 days",
        "absent-days": "0 days",
        "late-days": "1 days",
    }


def test_bind_attendance_full_page_ids(attendance_payload):
    fields = bind_attendance(summarize_attendance(attendance_payload["data"], MARCH), ChartView.FULL)

    assert set(fields) == {"overall-attendance", "present-count", "absent-count", "late-count"}


def test_bind_behaviour_empty_messages():
    bound = bind_behaviour(summarize_behaviour({}, {}))

    assert bound["fields"] == {"total-positive-points": "0", "total-negative-points": "0"}
    assert bound["positiveEmpty"] == NO_POSITIVE_MESSAGE
    assert bound["negativeEmpty"] == NO_NEGATIVE_MESSAGE


def test_chart_series_count_half_days(attendance_payload):
    records = attendance_payload["data"]
    chart = build_attendance_chart(records, ["2024-03-01", "2024-03-05"], view=ChartView.FULL)

    present, absent, late = chart["data"]["datasets"]
    assert [d["label"] for d in chart["data"]["datasets"]] == ["Present", "Absent", "Late"]
    assert chart["data"]["labels"] == ["March 1, 2024", "March 5, 2024"]
    assert present["data"] == [1, 1]
    assert absent["data"] == [0, 0]
    assert late["data"] == [1, 0]


def test_chart_is_stacked_and_capped_at_full_day(attendance_payload):
    chart = build_attendance_chart(attendance_payload["data"], ["2024-03-04"])

    y = chart["options"]["scales"]["y"]
    assert y["stacked"] and chart["options"]["scales"]["x"]["stacked"]
    assert y["max"] == 2
    assert y["tickLabels"] == {"0": "0", "1": "Half Day", "2": "Full Day"}


def test_compact_chart_keeps_last_ten_dates():
    records = _fortnight()
    dates = sorted(records)

    compact = build_attendance_chart(records, dates, view=ChartView.COMPACT)
    full = build_attendance_chart(records, dates, view=ChartView.FULL)

    assert len(compact["data"]["labels"]) == 10
    assert compact["data"]["labels"][-1] == "March 14, 2024"
    assert compact["data"]["labels"][0] == "March 5, 2024"
    assert len(full["data"]["labels"]) == 14


def test_chart_skips_dates_without_records():
    chart = build_attendance_chart({"2024-03-04": {"AM": {"status": "present"}}}, ["2024-03-01", "2024-03-04"])

    assert chart["data"]["labels"] == ["March 4, 2024"]


def test_recolor_changes_colours_only(attendance_payload):
    light = build_attendance_chart(attendance_payload["data"], ["2024-03-01", "2024-03-04"], theme="light-theme")
    dark = recolor_chart(light, "dark-theme")

    assert dark["data"]["labels"] == light["data"]["labels"]
    assert [d["data"] for d in dark["data"]["datasets"]] == [d["data"] for d in light["data"]["datasets"]]
    assert dark["data"]["datasets"][0]["borderColor"] == "#2ecc71"
    assert light["data"]["datasets"][0]["borderColor"] == "#28a745"
    assert dark["options"]["plugins"]["legend"]["labels"]["color"] == "#f8f9fa"


def test_unknown_theme_uses_light_palette():
    assert chart_palette("sepia") == chart_palette("light-theme")


def test_date_bounds_from_recorded_dates():
    assert bind_date_bounds(["2024-03-12", "2023-09-05", "bad"]) == {"min": "2023-09-05", "max": "2024-03-12"}


def test_date_bounds_prefill_is_clamped_to_earliest_date():
    bounds = bind_date_bounds(["2024-03-01", "2024-03-12"], ChartView.FULL)

    assert bounds["prefill"] == {"start": "2024-03-01", "end": "2024-03-12"}


def test_date_bounds_empty():
    assert bind_date_bounds([]) is None
