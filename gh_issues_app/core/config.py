"""Central configuration, constants, tuning knobs, and shared column definitions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

# =============================================================================
# GitHub API Settings
# =============================================================================
GITHUB_API_URL = "https://api.github.com"
GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
USER_AGENT = "github-issues-dashboard"

# Pagination limits for the issues endpoint
ISSUES_PER_PAGE: int = 100  # GitHub API max per page
MAX_ISSUES: int = 1000  # hard cap per analysis run

# No timeout means an unresponsive API stalls the run forever
REQUEST_TIMEOUT_SECONDS: float = 30.0

# =============================================================================
# Weekly Window Settings
# =============================================================================
WEEKS_ANALYZED: int = 10
DAYS_PER_WEEK: int = 7

# "Today" and the calendar date of every issue timestamp are taken in this zone
TIMEZONE = "UTC"
DATE_FORMAT = "%Y-%m-%d"

LOG_LEVEL = "INFO"

# =============================================================================
# Issue States
# =============================================================================
STATE_OPEN = "open"
STATE_CLOSED = "closed"

# Ratio display for the tagged variants that carry no number
RATIO_INFINITE_LABEL = "Infinity"
RATIO_UNDEFINED_LABEL = "n/a"

# =============================================================================
# Table Column Sets (fallbacks when columns.yaml is absent)
# =============================================================================
ISSUE_LIST_COLUMNS: Sequence[str] = (
    "ID",
    "title",
    "state",
    "created_date",
    "updated_date",
    "Link",
)

WEEKLY_COUNT_COLUMNS: Sequence[str] = (
    "week_label",
    "new_issues",
    "closed_issues",
)

WEEKLY_RATIO_COLUMNS: Sequence[str] = (
    "week_label",
    "new_issues",
    "closed_issues",
    "ratio_display",
)

WEEKLY_CLOSURE_COLUMNS: Sequence[str] = (
    "week_label",
    "open_at_start",
    "new_issues",
    "closed_issues",
    "closure_rate_display",
)


@dataclass(slots=True)
class AppSettings:
    api_url: str = GITHUB_API_URL
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    log_level: str = LOG_LEVEL
    max_table_rows: int = MAX_ISSUES
    download_encoding: str = "utf-8"


SETTINGS = AppSettings()


def settings_from_secrets(secrets: Mapping[str, Any] | None) -> AppSettings:
    """Overlay values from a Streamlit secrets mapping onto the defaults.

    Keys may live in a ``[github]`` section or at the top level; the section
    wins when both are present. Unknown or empty values keep the default.
    """
    if not secrets:
        return SETTINGS
    section = secrets.get("github", {}) or {}

    def _lookup(name: str):
        return section.get(name) or secrets.get(name)

    overrides: dict[str, Any] = {}
    api_url = _lookup("GITHUB_API_URL")
    if api_url:
        overrides["api_url"] = str(api_url).rstrip("/")
    timeout = _lookup("REQUEST_TIMEOUT")
    if timeout:
        overrides["request_timeout"] = float(timeout)
    log_level = _lookup("LOG_LEVEL")
    if log_level:
        overrides["log_level"] = str(log_level).upper()
    return replace(SETTINGS, **overrides)
