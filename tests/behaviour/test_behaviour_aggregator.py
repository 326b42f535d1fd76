import pytest

from src.pupil_dashboard.pupil_dashboard.behaviour.aggregator import (
    behaviour_tallies,
    negative_breakdown,
    positive_breakdown,
    summarize_behaviour,
)
from src.pupil_dashboard.pupil_dashboard.core.exceptions import ValidationError


def test_summary_totals_and_breakdown(behaviour_payload):
    positive, negative = behaviour_tallies(behaviour_payload)

    summary = summarize_behaviour(positive, negative)

    assert summary.total_positive == 28
    assert summary.total_negative == 3
    assert [r.label for r in summary.positive] == ["Effort", "Kindness", "Homework", "Focus", "Reading", "Other (2 more)"]
    assert summary.positive[-1].points == 2
    assert summary.positive[0].display == "+10"
    assert [(r.label, r.display) for r in summary.negative] == [("Late to lesson", "-2"), ("No equipment", "-1")]


def test_positive_breakdown_never_exceeds_six_rows():
    tally = {f"reason {i}": i for i in range(40)}

    rows = positive_breakdown(tally)

    assert len(rows) == 6
    assert rows[-1].label == "Other (35 more)"
    assert rows[-1].points == sum(range(35))


def test_exactly_five_positive_reasons_has_no_other_row():
    rows = positive_breakdown({"a": 5, "b": 4, "c": 3, "d": 2, "e": 1})

    assert len(rows) == 5
    assert not any(r.label.startswith("Other") for r in rows)


def test_negative_breakdown_shows_every_entry():
    tally = {f"reason {i}": i + 1 for i in range(12)}

    assert len(negative_breakdown(tally)) == 12


def test_equal_points_keep_input_order():
    rows = negative_breakdown({"first": 1, "second": 3, "third": 1})

    assert [r.label for r in rows] == ["second", "first", "third"]


def test_empty_tallies():
    summary = summarize_behaviour({}, None)

    assert summary.total_positive == 0
    assert summary.total_negative == 0
    assert summary.positive == []
    assert summary.negative == []


def test_tallies_default_missing_reasons_to_empty():
    assert behaviour_tallies({"data": {}}) == ({}, {})


@pytest.mark.parametrize("payload", [None, {}, {"data": []}, {"data": {"positive_reasons": [1, 2]}}])
def test_tallies_reject_malformed_payload(payload):
    with pytest.raises(ValidationError):
        behaviour_tallies(payload)
