"""Central column metadata and helpers for table rendering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import streamlit as st

# Mapping of raw column keys to (label, help text, format key)
# format key: "int" -> integer, "float2" -> 2 decimal float, None -> default text column
COLUMN_METADATA: dict[str, tuple[str, str, str | None]] = {
    # Issue list
    "ID": ("ID", "Issue number in the repository.", None),
    "title": ("Title", "Issue title from GitHub.", None),
    "state": ("Status", "Current issue state (open or closed).", None),
    "created_date": ("Created At", "Date the issue was opened.", None),
    "updated_date": ("Updated At", "Date of the most recent update on GitHub.", None),
    # Weekly tables
    "week_label": ("Week", "Seven-day window, oldest first.", None),
    "new_issues": ("New Issues", "Issues created during the week.", "int"),
    "closed_issues": ("Closed Issues", "Issues closed during the week.", "int"),
    "open_at_start": (
        "Open at Start",
        "Issues created before the week began and still open on its first day.",
        "int",
    ),
    "closure_rate": (
        "Closure Rate",
        "Closed issues as a share of issues open at start plus new issues.",
        "float2",
    ),
    "closure_rate_display": (
        "Closure Rate",
        "Closed issues as a share of issues open at start plus new issues.",
        None,
    ),
    "ratio_display": (
        "Ratio (New:Closed)",
        "New issues per closed issue; Infinity when nothing closed, n/a when nothing happened.",
        None,
    ),
    # Status counts
    "status": ("Status", "Issue state bucket.", None),
    "count": ("Count", "Number of fetched issues.", "int"),
}


def apply_column_metadata(
    columns: Iterable[str],
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return a column_config dictionary with human labels and hover help."""

    config: dict[str, Any] = dict(existing or {})
    for col in columns:
        if col in config:
            continue
        meta = COLUMN_METADATA.get(col)
        if not meta:
            continue
        label, help_text, fmt = meta
        if fmt == "int":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%d")
        elif fmt == "float2":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%.2f")
        else:
            config[col] = st.column_config.Column(label, help=help_text)
    return config
