from datetime import date, datetime, timedelta

import pytest
import pytz

from gh_issues_app.analytics.metrics.status import status_counts
from gh_issues_app.analytics.metrics.weekly import (
    aggregate_weekly,
    average_closure_rate,
    build_week_windows,
    closure_rate,
)
from gh_issues_app.core.models import IssueModel, Ratio, RatioKind, WeekBucket

TODAY = date(2024, 6, 30)
# Window starts 2024-04-21; bucket i spans [04-21 + 7i, 04-27 + 7i]


def _issue(number, created, closed=None, state=None):
    return IssueModel(
        number=number,
        title=f"Issue {number}",
        state=state or ("closed" if closed else "open"),
        created=created,
        closed=closed,
        updated=closed or created,
        html_url=f"https://github.com/octo/repo/issues/{number}",
    )


def _utc(*args):
    return datetime(*args, tzinfo=pytz.UTC)


def test_windows_are_contiguous_and_span_seventy_days():
    windows = build_week_windows(TODAY)
    assert len(windows) == 10
    assert windows[0][0] == date(2024, 4, 21)
    for (start, end), (next_start, _) in zip(windows, windows[1:], strict=False):
        assert end - start == timedelta(days=6)
        assert next_start - start == timedelta(days=7)
    assert (windows[-1][1] - windows[0][0]).days + 1 == 70
    assert windows[-1][1] == TODAY - timedelta(days=1)


def test_bucket_labels_are_one_indexed():
    buckets = aggregate_weekly([], TODAY)
    assert buckets[0].label == "Week 1 (2024-04-21 - 2024-04-27)"
    assert buckets[9].label == "Week 10 (2024-06-23 - 2024-06-29)"


def test_created_late_on_week_end_counts_in_that_week():
    buckets = aggregate_weekly([_issue(1, _utc(2024, 4, 27, 23, 59, 59))], TODAY)
    assert buckets[0].new_issues == 1
    assert buckets[1].new_issues == 0
    # Already open when week 2 starts
    assert buckets[1].open_at_start == 1


def test_created_at_midnight_on_week_start_is_new_not_open_at_start():
    buckets = aggregate_weekly([_issue(1, _utc(2024, 5, 12, 0, 0, 0))], TODAY)
    assert buckets[3].new_issues == 1
    assert buckets[3].open_at_start == 0
    assert buckets[2].new_issues == 0


def test_old_never_closed_issue_is_open_at_start_everywhere():
    buckets = aggregate_weekly([_issue(1, _utc(2023, 1, 5, 8, 0))], TODAY)
    assert [b.open_at_start for b in buckets] == [1] * 10
    assert sum(b.new_issues for b in buckets) == 0


def test_closed_issue_counts_until_its_closing_week():
    issue = _issue(1, _utc(2024, 1, 1), closed=_utc(2024, 5, 20, 15, 0))
    buckets = aggregate_weekly([issue], TODAY)
    assert [b.open_at_start for b in buckets] == [1, 1, 1, 1, 1, 0, 0, 0, 0, 0]
    assert [b.closed_issues for b in buckets] == [0, 0, 0, 0, 1, 0, 0, 0, 0, 0]


def test_closed_on_week_start_date_is_open_at_start_and_closed():
    issue = _issue(1, _utc(2024, 3, 1), closed=_utc(2024, 5, 19, 6, 30))
    week = aggregate_weekly([issue], TODAY)[4]
    assert week.start == date(2024, 5, 19)
    assert week.open_at_start == 1
    assert week.closed_issues == 1
    assert week.closure_rate == pytest.approx(100.0)


def test_issue_outside_window_and_closed_before_is_ignored():
    issue = _issue(1, _utc(2023, 1, 1), closed=_utc(2024, 4, 1))
    buckets = aggregate_weekly([issue], TODAY)
    assert all(b.open_at_start == b.new_issues == b.closed_issues == 0 for b in buckets)


def test_timestamps_are_bucketed_by_local_calendar_date():
    # 02:00 UTC on 04-28 is still 04-27 in Santiago (UTC-4)
    issue = _issue(1, _utc(2024, 4, 28, 2, 0))
    utc_buckets = aggregate_weekly([issue], TODAY)
    local_buckets = aggregate_weekly([issue], TODAY, tz_name="America/Santiago")
    assert utc_buckets[1].new_issues == 1
    assert local_buckets[0].new_issues == 1


def test_zero_activity_week_has_zero_rate_and_undefined_ratio():
    week = aggregate_weekly([], TODAY)[0]
    assert week.closure_rate == 0.0
    assert week.ratio.kind is RatioKind.UNDEFINED
    assert week.ratio.value is None
    assert week.ratio.display() == "n/a"


def test_new_without_closed_is_infinite_ratio():
    issues = [_issue(n, _utc(2024, 6, 24, 9, 0)) for n in range(3)]
    week = aggregate_weekly(issues, TODAY)[9]
    assert week.new_issues == 3
    assert week.closed_issues == 0
    assert week.ratio.kind is RatioKind.INFINITE
    assert week.ratio.display() == "Infinity"
    assert week.ratio != aggregate_weekly([], TODAY)[9].ratio


def test_finite_ratio_and_closure_rate():
    issues = [
        _issue(1, _utc(2024, 1, 1)),
        _issue(2, _utc(2024, 1, 2), closed=_utc(2024, 6, 25)),
        _issue(3, _utc(2024, 6, 24)),
        _issue(4, _utc(2024, 6, 24)),
    ]
    week = aggregate_weekly(issues, TODAY)[9]
    assert (week.open_at_start, week.new_issues, week.closed_issues) == (2, 2, 1)
    assert week.closure_rate == pytest.approx(25.0)
    assert week.ratio == Ratio(RatioKind.FINITE, 2.0)
    assert week.ratio.display() == "2.00"


def test_closure_rate_zero_denominator():
    assert closure_rate(0, 0, 0) == 0.0
    assert closure_rate(3, 1, 3) == pytest.approx(75.0)


def test_average_closure_rate_is_plain_mean():
    rates = [0.0, 10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0]
    buckets = [
        WeekBucket(
            index=i,
            start=TODAY,
            end=TODAY,
            new_issues=0,
            closed_issues=0,
            open_at_start=0,
            closure_rate=rate,
            ratio=Ratio.from_counts(0, 0),
        )
        for i, rate in enumerate(rates)
    ]
    assert average_closure_rate(buckets) == pytest.approx(45.0)
    assert average_closure_rate([]) == 0.0


def test_average_includes_zero_activity_weeks():
    issues = [
        _issue(1, _utc(2024, 6, 24), closed=_utc(2024, 6, 25)),
    ]
    buckets = aggregate_weekly(issues, TODAY)
    assert buckets[9].closure_rate == pytest.approx(100.0)
    assert average_closure_rate(buckets) == pytest.approx(10.0)


def test_status_counts():
    issues = [
        _issue(1, _utc(2024, 1, 1)),
        _issue(2, _utc(2024, 1, 1), closed=_utc(2024, 2, 1)),
        _issue(3, _utc(2024, 1, 1), closed=_utc(2024, 2, 1)),
    ]
    counts = status_counts(issues)
    assert (counts.open, counts.closed, counts.total) == (1, 2, 3)
