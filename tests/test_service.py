from datetime import date

import pytest

from gh_issues_app.core.github_client import GitHubAPI, InvalidRepositoryError, RepositoryNotFoundError
from gh_issues_app.core.mappers import MalformedIssueError
from gh_issues_app.core.models import AnalysisResult
from gh_issues_app.core.service import IssueService, NoIssuesFoundError

TODAY = date(2024, 6, 30)


class DummyAPI(GitHubAPI):
    def __init__(self, raw_issues=None, error=None):
        self.server = "https://api.github.com"
        self.raw_issues = raw_issues or []
        self.error = error
        self.calls = []

    def list_issues(self, repo_path, *, per_page=100, max_issues=1000, progress=None):
        self.calls.append((repo_path, max_issues))
        if self.error:
            raise self.error
        return list(self.raw_issues)


def _raw(number, created_at, closed_at=None):
    return {
        "number": number,
        "title": f"Issue {number}",
        "state": "closed" if closed_at else "open",
        "created_at": created_at,
        "closed_at": closed_at,
        "updated_at": closed_at or created_at,
        "html_url": f"https://github.com/octo/repo/issues/{number}",
    }


def test_analyze_builds_result():
    api = DummyAPI(
        [
            _raw(1, "2024-01-10T00:00:00Z"),
            _raw(2, "2024-06-24T09:00:00Z", "2024-06-26T10:00:00Z"),
            _raw(3, "2024-06-25T09:00:00Z"),
        ]
    )
    result = IssueService(api).analyze(" octo/repo ", today=TODAY)

    assert isinstance(result, AnalysisResult)
    assert result.repo_path == "octo/repo"
    assert api.calls == [("octo/repo", 1000)]
    assert (result.status_counts.open, result.status_counts.closed, result.status_counts.total) == (2, 1, 3)
    assert len(result.weeks) == 10
    last = result.weeks[-1]
    assert (last.open_at_start, last.new_issues, last.closed_issues) == (1, 2, 1)
    assert last.closure_rate == pytest.approx(100 / 3)
    expected_avg = sum(w.closure_rate for w in result.weeks) / 10
    assert result.average_closure_rate == pytest.approx(expected_avg)
    assert [i.number for i in result.issues] == [1, 2, 3]
    assert result.today == TODAY


def test_each_run_returns_a_new_result():
    service = IssueService(DummyAPI([_raw(1, "2024-06-24T09:00:00Z")]))
    first = service.analyze("octo/repo", today=TODAY)
    second = service.analyze("octo/repo", today=TODAY)
    assert first == second
    assert first is not second
    with pytest.raises(AttributeError):
        first.repo_path = "other/repo"


def test_empty_repository_raises_no_issues_found():
    with pytest.raises(NoIssuesFoundError, match="No issues found for this repository."):
        IssueService(DummyAPI([])).analyze("octo/empty", today=TODAY)


def test_invalid_repo_never_reaches_api():
    api = DummyAPI([_raw(1, "2024-06-24T09:00:00Z")])
    with pytest.raises(InvalidRepositoryError):
        IssueService(api).analyze("octo", today=TODAY)
    assert api.calls == []


def test_fetch_errors_propagate():
    api = DummyAPI(error=RepositoryNotFoundError("octo/missing"))
    with pytest.raises(RepositoryNotFoundError):
        IssueService(api).analyze("octo/missing", today=TODAY)


def test_malformed_record_fails_the_run():
    api = DummyAPI([_raw(1, "2024-06-24T09:00:00Z"), _raw(2, None)])
    with pytest.raises(MalformedIssueError):
        IssueService(api).analyze("octo/repo", today=TODAY)


def test_progress_reports_aggregation_step():
    events = []
    service = IssueService(DummyAPI([_raw(1, "2024-06-24T09:00:00Z")]))
    service.analyze("octo/repo", today=TODAY, progress=lambda m, c, t: events.append(m))
    assert events == ["Calculating weekly metrics"]
