from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import POSITIVE_BREAKDOWN_LIMIT
from ..core.exceptions import ValidationError
from .model import BehaviourSummary, BreakdownRow


def _ranked(tally: Mapping[str, Any]) -> list[tuple[str, float]]:
    # sorted() is stable, so equal points keep their input order
    return sorted(((str(k), v) for k, v in tally.items()), key=lambda kv: kv[1], reverse=True)


def positive_breakdown(tally: Mapping[str, Any], *, limit: int = POSITIVE_BREAKDOWN_LIMIT) -> list[BreakdownRow]:
    """Top `limit` reasons, the rest folded into one `Other (N more)` row."""
    ranked = _ranked(tally)
    rows = [BreakdownRow(label=label, points=points, sign="+") for label, points in ranked[:limit]]

    rest = ranked[limit:]
    if rest:
        rows.append(
            BreakdownRow(
                label=f"Other ({len(rest)} more)",
                points=sum(points for _, points in rest),
                sign="+",
            )
        )
    return rows


def negative_breakdown(tally: Mapping[str, Any]) -> list[BreakdownRow]:
    return [BreakdownRow(label=label, points=points, sign="-") for label, points in _ranked(tally)]


def summarize_behaviour(
    positive: Optional[Mapping[str, Any]],
    negative: Optional[Mapping[str, Any]],
) -> BehaviourSummary:
    positive = positive or {}
    negative = negative or {}
    return BehaviourSummary(
        total_positive=sum(positive.values()),
        total_negative=sum(negative.values()),
        positive=positive_breakdown(positive),
        negative=negative_breakdown(negative),
    )


def behaviour_tallies(payload: Any) -> tuple[dict, dict]:
    """Extract (positive_reasons, negative_reasons) from an upstream behaviour document."""
    if not isinstance(payload, Mapping) or not isinstance(payload.get("data"), Mapping):
        raise ValidationError("Invalid behaviour data structure")
    data = payload["data"]
    positive = data.get("positive_reasons") or {}
    negative = data.get("negative_reasons") or {}
    if not isinstance(positive, Mapping) or not isinstance(negative, Mapping):
        raise ValidationError("Invalid behaviour data structure")
    return dict(positive), dict(negative)
