"""Pure helpers to build the analyzer page tables (no Streamlit)."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd
import pytz

from gh_issues_app.core.column_config import get_columns
from gh_issues_app.core.config import DATE_FORMAT, TIMEZONE
from gh_issues_app.core.mappers import issues_to_dataframe
from gh_issues_app.core.models import AnalysisResult, WeekBucket


@dataclass(slots=True)
class OverviewContext:
    repo_path: str
    status_rows: pd.DataFrame
    weekly: pd.DataFrame
    weekly_counts: pd.DataFrame
    weekly_ratio: pd.DataFrame
    weekly_closure: pd.DataFrame
    average_closure_rate: float
    average_closure_display: str
    issue_list: pd.DataFrame


def weekly_frame(weeks: tuple[WeekBucket, ...] | list[WeekBucket]) -> pd.DataFrame:
    rows = []
    for w in weeks:
        rows.append(
            {
                "week": w.index + 1,
                "week_label": w.label,
                "week_start": pd.Timestamp(w.start),
                "week_end": pd.Timestamp(w.end),
                "new_issues": w.new_issues,
                "closed_issues": w.closed_issues,
                "open_at_start": w.open_at_start,
                "closure_rate": w.closure_rate,
                "closure_rate_display": f"{w.closure_rate:.2f}%",
                "ratio_kind": w.ratio.kind.value,
                "ratio_value": w.ratio.value,
                "ratio_display": w.ratio.display(),
            }
        )
    return pd.DataFrame(rows)


def issue_list_frame(result: AnalysisResult, tz_name: str = TIMEZONE) -> pd.DataFrame:
    """All fetched issues, newest first, with display-ready ID and date columns."""
    df = issues_to_dataframe(result.issues)
    if df.empty:
        return df
    tz = pytz.timezone(tz_name)
    df = df.sort_values(by="created", ascending=False, kind="stable").reset_index(drop=True)
    df["ID"] = df["number"].apply(lambda n: f"#{n}")
    df["created_date"] = df["created"].dt.tz_convert(tz).dt.strftime(DATE_FORMAT)
    df["updated_date"] = df["updated"].dt.tz_convert(tz).dt.strftime(DATE_FORMAT).fillna("")
    return df


def _select(df: pd.DataFrame, set_name: str) -> pd.DataFrame:
    cols = [c for c in get_columns(set_name) if c in df.columns]
    return df[cols].copy()


def build_context(result: AnalysisResult, tz_name: str = TIMEZONE) -> OverviewContext:
    counts = result.status_counts
    status_rows = pd.DataFrame(
        [
            {"status": "Open Issues", "count": counts.open},
            {"status": "Closed Issues", "count": counts.closed},
            {"status": "Total Issues", "count": counts.total},
        ]
    )
    weekly = weekly_frame(result.weeks)
    return OverviewContext(
        repo_path=result.repo_path,
        status_rows=status_rows,
        weekly=weekly,
        weekly_counts=_select(weekly, "weekly_counts"),
        weekly_ratio=_select(weekly, "weekly_ratio"),
        weekly_closure=_select(weekly, "weekly_closure"),
        average_closure_rate=result.average_closure_rate,
        average_closure_display=f"{result.average_closure_rate:.2f}%",
        issue_list=issue_list_frame(result, tz_name),
    )
