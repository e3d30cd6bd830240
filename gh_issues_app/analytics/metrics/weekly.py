"""Weekly bucket metrics: new, closed, open-at-start, closure rate and ratio.

Each bucket is evaluated independently against every issue, so one issue can
count as "open at start" in several consecutive weeks. The buckets answer
"what did each week look like", they are not a partition of the issues.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

import pandas as pd
import pytz

from gh_issues_app.core.config import DAYS_PER_WEEK, TIMEZONE, WEEKS_ANALYZED
from gh_issues_app.core.mappers import issues_to_dataframe
from gh_issues_app.core.models import IssueModel, Ratio, WeekBucket


def today_in_timezone(tz_name: str = TIMEZONE) -> date:
    return datetime.now(pytz.timezone(tz_name)).date()


def build_week_windows(
    today: date,
    *,
    weeks: int = WEEKS_ANALYZED,
    days_per_week: int = DAYS_PER_WEEK,
) -> list[tuple[date, date]]:
    """Return ``(start, end)`` date pairs, oldest first, both ends inclusive.

    The first window starts ``weeks * days_per_week`` days before ``today``;
    windows are contiguous, so the last one ends the day before ``today``.
    """
    window_start = today - timedelta(days=weeks * days_per_week)
    windows = []
    for i in range(weeks):
        start = window_start + timedelta(days=i * days_per_week)
        windows.append((start, start + timedelta(days=days_per_week - 1)))
    return windows


def closure_rate(closed_issues: int, open_at_start: int, new_issues: int) -> float:
    """Percentage of issues in play during a week that were closed that week."""
    in_play = open_at_start + new_issues
    if in_play <= 0:
        return 0.0
    return closed_issues / in_play * 100


def _calendar_days(series: pd.Series, tz_name: str) -> pd.Series:
    """Reduce tz-aware timestamps to naive midnight of their local calendar date."""
    return series.dt.tz_convert(pytz.timezone(tz_name)).dt.tz_localize(None).dt.normalize()


def aggregate_weekly(
    issues: Sequence[IssueModel],
    today: date | None = None,
    *,
    weeks: int = WEEKS_ANALYZED,
    tz_name: str = TIMEZONE,
) -> list[WeekBucket]:
    """Build the weekly buckets ending before ``today`` (defaults to now in ``tz_name``).

    Timestamps are compared by calendar date in ``tz_name``: an issue created
    at any time on a bucket's first or last day falls inside that bucket.
    """
    if today is None:
        today = today_in_timezone(tz_name)
    df = issues_to_dataframe(issues)
    created_day = _calendar_days(df["created"], tz_name)
    closed_day = _calendar_days(df["closed"], tz_name)

    buckets: list[WeekBucket] = []
    for index, (start, end) in enumerate(build_week_windows(today, weeks=weeks)):
        lo = pd.Timestamp(start)
        hi = pd.Timestamp(end)
        new_mask = created_day.between(lo, hi)
        closed_mask = closed_day.notna() & closed_day.between(lo, hi)
        open_mask = (created_day < lo) & (closed_day.isna() | (closed_day >= lo))

        new_issues = int(new_mask.sum())
        closed_issues = int(closed_mask.sum())
        open_at_start = int(open_mask.sum())
        buckets.append(
            WeekBucket(
                index=index,
                start=start,
                end=end,
                new_issues=new_issues,
                closed_issues=closed_issues,
                open_at_start=open_at_start,
                closure_rate=closure_rate(closed_issues, open_at_start, new_issues),
                ratio=Ratio.from_counts(new_issues, closed_issues),
            )
        )
    return buckets


def average_closure_rate(buckets: Sequence[WeekBucket]) -> float:
    """Arithmetic mean of every bucket's closure rate, zero-activity weeks included."""
    if not buckets:
        return 0.0
    return sum(b.closure_rate for b in buckets) / len(buckets)
