from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BreakdownRow:
    label: str
    points: float
    sign: str = "+"

    @property
    def display(self) -> str:
        return f"{self.sign}{_fmt_points(self.points)}"

    def to_dict(self) -> dict:
        return {"label": self.label, "points": self.points, "display": self.display}


@dataclass(frozen=True)
class BehaviourSummary:
    total_positive: float
    total_negative: float
    positive: list[BreakdownRow] = field(default_factory=list)
    negative: list[BreakdownRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalPositive": self.total_positive,
            "totalNegative": self.total_negative,
            "positive": [r.to_dict() for r in self.positive],
            "negative": [r.to_dict() for r in self.negative],
        }


def _fmt_points(points: float) -> str:
    return str(int(points)) if float(points).is_integer() else str(points)
