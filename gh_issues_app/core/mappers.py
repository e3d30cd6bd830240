"""Mapping raw GitHub issue JSON into IssueModel instances and DataFrames."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import pandas as pd

from .config import STATE_CLOSED, STATE_OPEN
from .models import IssueModel

# Full date and time with an explicit offset, as the REST API emits them
_ISO_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})$")


class MalformedIssueError(ValueError):
    """Issue record whose timestamps cannot be placed on a calendar."""


def _parse_dt(val) -> datetime | None:
    """Parse a GitHub timestamp; ``None`` when absent, ``ValueError`` when malformed.

    Words like ``"now"``, bare years and epoch integers are rejected rather
    than coerced into a date.
    """
    if val is None or val == "":
        return None
    if not isinstance(val, str) or not _ISO_TIMESTAMP.match(val.strip()):
        raise ValueError(f"not an ISO 8601 timestamp: {val!r}")
    ts = pd.to_datetime(val.strip(), utc=True, format="ISO8601")
    if pd.isna(ts):
        raise ValueError(f"not an ISO 8601 timestamp: {val!r}")
    return ts.to_pydatetime()


def _required_dt(raw: dict[str, Any], key: str, number) -> datetime | None:
    try:
        return _parse_dt(raw.get(key))
    except ValueError as exc:
        raise MalformedIssueError(f"Issue #{number}: unparseable {key} {raw.get(key)!r}") from exc


def _issue_number(number) -> int:
    if number is None:
        return 0
    if isinstance(number, bool):
        raise MalformedIssueError(f"Issue #{number}: non-numeric number")
    try:
        return int(number)
    except (TypeError, ValueError) as exc:
        raise MalformedIssueError(f"Issue #{number}: non-numeric number") from exc


def map_issue(raw: dict[str, Any]) -> IssueModel:
    number = raw.get("number")
    issue_number = _issue_number(number)
    created = _required_dt(raw, "created_at", number)
    if created is None:
        raise MalformedIssueError(f"Issue #{number}: missing created_at")
    closed = _required_dt(raw, "closed_at", number)
    try:
        updated = _parse_dt(raw.get("updated_at"))
    except ValueError:
        # Display-only field
        updated = None

    state = str(raw.get("state") or "").lower()
    if state not in (STATE_OPEN, STATE_CLOSED):
        # State is derived from closed_at when GitHub omits it
        state = STATE_CLOSED if closed else STATE_OPEN

    return IssueModel(
        number=issue_number,
        title=raw.get("title") or "",
        state=state,
        created=created,
        closed=closed,
        updated=updated,
        html_url=raw.get("html_url") or "",
        is_pull_request="pull_request" in raw,
    )


def map_issues(raw_issues: Iterable[dict[str, Any]]) -> list[IssueModel]:
    return [map_issue(r) for r in raw_issues]


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "number": i.number,
                "title": i.title,
                "state": i.state,
                "created": i.created,
                "closed": i.closed,
                "updated": i.updated,
                "html_url": i.html_url,
                "is_pull_request": i.is_pull_request,
            }
        )
    df = pd.DataFrame(
        rows,
        columns=["number", "title", "state", "created", "closed", "updated", "html_url", "is_pull_request"],
    )
    for col in ("created", "closed", "updated"):
        df[col] = pd.to_datetime(df[col], utc=True, errors="coerce")
    return df
