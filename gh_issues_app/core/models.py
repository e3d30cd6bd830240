"""Domain data models for GitHub issues and the weekly analysis built from them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from .config import DATE_FORMAT, RATIO_INFINITE_LABEL, RATIO_UNDEFINED_LABEL, STATE_CLOSED, STATE_OPEN


@dataclass(frozen=True, slots=True)
class IssueModel:
    number: int
    title: str
    state: str
    created: datetime
    closed: datetime | None
    updated: datetime | None
    html_url: str
    is_pull_request: bool = False

    @property
    def is_open(self) -> bool:
        return self.state == STATE_OPEN

    @property
    def is_closed(self) -> bool:
        return self.state == STATE_CLOSED


@dataclass(frozen=True, slots=True)
class StatusCounts:
    open: int
    closed: int
    total: int


class RatioKind(str, Enum):
    FINITE = "finite"
    INFINITE = "infinite"  # new issues but nothing closed
    UNDEFINED = "undefined"  # no activity at all


@dataclass(frozen=True, slots=True)
class Ratio:
    """New:closed ratio for one week, tagged so the no-number cases stay distinct."""

    kind: RatioKind
    value: float | None = None

    @classmethod
    def from_counts(cls, new_issues: int, closed_issues: int) -> Ratio:
        if closed_issues > 0:
            return cls(RatioKind.FINITE, new_issues / closed_issues)
        if new_issues > 0:
            return cls(RatioKind.INFINITE)
        return cls(RatioKind.UNDEFINED)

    @property
    def is_finite(self) -> bool:
        return self.kind is RatioKind.FINITE

    def display(self) -> str:
        if self.kind is RatioKind.FINITE:
            return f"{self.value:.2f}"
        if self.kind is RatioKind.INFINITE:
            return RATIO_INFINITE_LABEL
        return RATIO_UNDEFINED_LABEL


@dataclass(frozen=True, slots=True)
class WeekBucket:
    index: int
    start: date
    end: date
    new_issues: int
    closed_issues: int
    open_at_start: int
    closure_rate: float
    ratio: Ratio

    @property
    def label(self) -> str:
        return f"Week {self.index + 1} ({self.start.strftime(DATE_FORMAT)} - {self.end.strftime(DATE_FORMAT)})"


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Outcome of one analysis run; replaced wholesale by the next run."""

    repo_path: str
    status_counts: StatusCounts
    weeks: tuple[WeekBucket, ...]
    average_closure_rate: float
    issues: tuple[IssueModel, ...]
    today: date
