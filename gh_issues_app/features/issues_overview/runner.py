"""Run one analysis and translate failures into user-facing messages (no Streamlit)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

import requests

from gh_issues_app.core.github_client import (
    GitHubAPIError,
    InvalidRepositoryError,
    ProgressCallback,
    validate_repo_path,
)
from gh_issues_app.core.mappers import MalformedIssueError
from gh_issues_app.core.models import AnalysisResult
from gh_issues_app.core.service import IssueService, NoIssuesFoundError

logger = logging.getLogger(__name__)

LEVEL_ERROR = "error"
LEVEL_INFO = "info"


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    result: AnalysisResult | None
    message: str | None = None
    level: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def check_repo_path(repo_path: str) -> AnalysisOutcome | None:
    """Failed outcome for a malformed identifier, or ``None`` when it may be fetched."""
    try:
        validate_repo_path(repo_path)
    except InvalidRepositoryError as exc:
        return AnalysisOutcome(None, str(exc), LEVEL_ERROR)
    return None


def run_analysis(
    service: IssueService,
    repo_path: str,
    *,
    today: date | None = None,
    progress: ProgressCallback | None = None,
) -> AnalysisOutcome:
    try:
        result = service.analyze(repo_path, today=today, progress=progress)
    except InvalidRepositoryError as exc:
        return AnalysisOutcome(None, str(exc), LEVEL_ERROR)
    except NoIssuesFoundError as exc:
        return AnalysisOutcome(None, str(exc), LEVEL_INFO)
    except (GitHubAPIError, MalformedIssueError, requests.RequestException) as exc:
        logger.warning("Analysis of %s failed: %s", repo_path, exc)
        return AnalysisOutcome(None, f"Error fetching issues: {exc}", LEVEL_ERROR)
    return AnalysisOutcome(result)
