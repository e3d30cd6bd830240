"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from gh_issues_app.core.column_config import get_columns
from gh_issues_app.core.config import SETTINGS

from .column_metadata import apply_column_metadata


def add_issue_link(df: pd.DataFrame, url_col: str = "html_url", label: str = "Link"):
    if df.empty or url_col not in df.columns:
        return df, {}
    out = df.copy()
    out[label] = out[url_col].fillna("").astype(str)
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"/((?:issues|pull)/\d+)$",
            help="Open on GitHub",
            width="medium",
        )
    }
    return out, cfg


def prepare_issue_table(df: pd.DataFrame) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    if df.empty:
        return df, [], {}
    table, cfg = add_issue_link(df)
    display_cols = [col for col in get_columns("issue_list") if col in table.columns]
    if not display_cols:
        display_cols = [col for col in table.columns if col != "html_url"]
    return table, display_cols, cfg


def render_issue_table(df: pd.DataFrame, limit: int | None = None):
    table, display_cols, cfg = prepare_issue_table(df)
    if not display_cols:
        st.info("No issues to display.")
        return
    limit = limit or SETTINGS.max_table_rows
    column_config = apply_column_metadata(display_cols, cfg)
    st.dataframe(table[display_cols].head(limit), hide_index=True, column_config=column_config)


def render_week_table(df: pd.DataFrame):
    if df.empty:
        st.info("No weekly data.")
        return
    column_config = apply_column_metadata(df.columns)
    st.dataframe(df, hide_index=True, column_config=column_config)
