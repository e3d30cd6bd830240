"""GitHub REST client wrapper (issues endpoint + page-number pagination)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import requests

from .config import (
    GITHUB_ACCEPT_HEADER,
    GITHUB_API_URL,
    ISSUES_PER_PAGE,
    MAX_ISSUES,
    REQUEST_TIMEOUT_SECONDS,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


class InvalidRepositoryError(ValueError):
    """Repository identifier is not of the form ``owner/name``."""


class GitHubAPIError(RuntimeError):
    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"GitHub API returned {status_code}")


class RepositoryNotFoundError(GitHubAPIError):
    def __init__(self, repo_path: str):
        self.repo_path = repo_path
        super().__init__(404, "Repository not found")


def validate_repo_path(repo_path: str | None) -> str:
    """Return the stripped identifier, or raise if it lacks a ``/``.

    Only the separator is checked; GitHub itself decides whether the owner
    and name are valid.
    """
    cleaned = (repo_path or "").strip()
    if "/" not in cleaned:
        raise InvalidRepositoryError("Please enter a valid repository in the format owner/repo")
    return cleaned


class GitHubAPI:
    def __init__(
        self,
        server: str = GITHUB_API_URL,
        *,
        timeout: float | None = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.server = server.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": GITHUB_ACCEPT_HEADER, "User-Agent": USER_AGENT})

    def issues_url(self, repo_path: str) -> str:
        return f"{self.server}/repos/{repo_path}/issues"

    def fetch_issues_page(self, repo_path: str, page: int, per_page: int = ISSUES_PER_PAGE) -> list[dict[str, Any]]:
        params = {"state": "all", "per_page": per_page, "page": page}
        logger.debug("GET %s page=%s per_page=%s", self.issues_url(repo_path), page, per_page)
        resp = self.session.get(self.issues_url(repo_path), params=params, timeout=self.timeout)
        if resp.status_code == 404:
            logger.warning("Repository %s not found", repo_path)
            raise RepositoryNotFoundError(repo_path)
        if not 200 <= resp.status_code < 300:
            logger.warning("Issues request failed %s: %s", resp.status_code, resp.text[:200])
            raise GitHubAPIError(resp.status_code)
        data = resp.json()
        if not isinstance(data, list):
            raise GitHubAPIError(resp.status_code, f"Unexpected issues payload type: {type(data).__name__}")
        return data

    def list_issues(
        self,
        repo_path: str,
        *,
        per_page: int = ISSUES_PER_PAGE,
        max_issues: int = MAX_ISSUES,
        progress: ProgressCallback | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch open and closed issues page by page, at most ``max_issues``.

        Pages are requested one at a time in ascending order. After each page
        the loop stops when the cap is reached, when the page is empty, or
        when the page is shorter than ``per_page``. Any failed request aborts
        the whole fetch; nothing fetched so far is returned.
        """
        repo_path = validate_repo_path(repo_path)
        out: list[dict[str, Any]] = []
        page = 1
        while True:
            if progress:
                progress(f"Fetching page {page} of issues for {repo_path}", len(out), max_issues)
            data = self.fetch_issues_page(repo_path, page, per_page=per_page)
            out.extend(data)
            if len(out) >= max_issues:
                logger.info("Reached %s issue cap for %s after %s page(s)", max_issues, repo_path, page)
                break
            if not data:
                break
            if len(data) < per_page:
                break
            page += 1
        out = out[:max_issues]
        logger.info("Fetched %s issue(s) for %s", len(out), repo_path)
        if progress:
            progress(f"Fetched {len(out)} issue(s) for {repo_path}", len(out), max_issues)
        return out
