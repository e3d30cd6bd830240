"""Issues Overview feature module: table frames for the analyzer page."""

from gh_issues_app.features.issues_overview.context import (
    OverviewContext,
    build_context,
    issue_list_frame,
    weekly_frame,
)

__all__ = [
    "OverviewContext",
    "build_context",
    "issue_list_frame",
    "weekly_frame",
]
