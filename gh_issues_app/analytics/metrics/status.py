"""Open/closed status counts (pure functions)."""

from __future__ import annotations

from collections.abc import Sequence

from gh_issues_app.core.models import IssueModel, StatusCounts


def status_counts(issues: Sequence[IssueModel]) -> StatusCounts:
    open_issues = sum(1 for i in issues if i.is_open)
    closed_issues = sum(1 for i in issues if i.is_closed)
    return StatusCounts(open=open_issues, closed=closed_issues, total=len(issues))
