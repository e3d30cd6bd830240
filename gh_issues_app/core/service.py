"""IssueService: orchestrates fetching, mapping, and the weekly analysis."""

from __future__ import annotations

import logging
from datetime import date

from gh_issues_app.analytics.metrics.status import status_counts
from gh_issues_app.analytics.metrics.weekly import aggregate_weekly, average_closure_rate, today_in_timezone

from .config import MAX_ISSUES, TIMEZONE, WEEKS_ANALYZED
from .github_client import GitHubAPI, ProgressCallback, validate_repo_path
from .mappers import map_issues
from .models import AnalysisResult, IssueModel

logger = logging.getLogger(__name__)


class NoIssuesFoundError(LookupError):
    def __init__(self, repo_path: str):
        self.repo_path = repo_path
        super().__init__("No issues found for this repository.")


class IssueService:
    def __init__(self, api: GitHubAPI, *, tz_name: str = TIMEZONE):
        self.api = api
        self.tz_name = tz_name

    def fetch_issues(
        self,
        repo_path: str,
        *,
        max_issues: int = MAX_ISSUES,
        progress: ProgressCallback | None = None,
    ) -> list[IssueModel]:
        raw = self.api.list_issues(repo_path, max_issues=max_issues, progress=progress)
        return map_issues(raw)

    def analyze(
        self,
        repo_path: str,
        *,
        today: date | None = None,
        progress: ProgressCallback | None = None,
    ) -> AnalysisResult:
        """Fetch a repository's issues and build a fresh AnalysisResult.

        The identifier is validated before any request. Fetch errors and
        malformed records propagate unchanged; a successful fetch with no
        issues raises NoIssuesFoundError instead of producing empty buckets.
        """
        repo_path = validate_repo_path(repo_path)
        logger.info("Analyzing issues for %s", repo_path)
        issues = self.fetch_issues(repo_path, progress=progress)
        if not issues:
            raise NoIssuesFoundError(repo_path)

        if progress:
            progress("Calculating weekly metrics", None, None)
        today = today or today_in_timezone(self.tz_name)
        weeks = aggregate_weekly(issues, today, weeks=WEEKS_ANALYZED, tz_name=self.tz_name)
        result = AnalysisResult(
            repo_path=repo_path,
            status_counts=status_counts(issues),
            weeks=tuple(weeks),
            average_closure_rate=average_closure_rate(weeks),
            issues=tuple(issues),
            today=today,
        )
        logger.info(
            "Analysis for %s done: %s issue(s), average closure rate %.2f%%",
            repo_path,
            result.status_counts.total,
            result.average_closure_rate,
        )
        return result
