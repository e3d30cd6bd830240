"""Chart builders (Altair) for weekly issue trends."""

from __future__ import annotations

import altair as alt
import pandas as pd


def weekly_activity_chart(weekly: pd.DataFrame):
    """Grouped bars of new vs closed issues per week."""
    if weekly is None or weekly.empty:
        return None
    long_df = weekly.melt(
        id_vars=["week", "week_label"],
        value_vars=["new_issues", "closed_issues"],
        var_name="kind",
        value_name="count",
    )
    long_df["kind"] = long_df["kind"].map({"new_issues": "New", "closed_issues": "Closed"})
    chart = (
        alt.Chart(long_df)
        .mark_bar()
        .encode(
            x=alt.X("week:O", title="Week"),
            xOffset=alt.XOffset("kind:N"),
            y=alt.Y("count:Q", title="Issues"),
            color=alt.Color(
                "kind:N",
                scale=alt.Scale(domain=["New", "Closed"], range=["#1f77b4", "#2ca02c"]),
                legend=alt.Legend(title=None),
            ),
            tooltip=[
                alt.Tooltip("week_label:N", title="Week"),
                alt.Tooltip("kind:N", title="Kind"),
                alt.Tooltip("count:Q", title="Count"),
            ],
        )
        .properties(height=280)
    )
    return chart


def closure_rate_chart(weekly: pd.DataFrame, average: float | None = None):
    """Closure rate line per week, with the average as a dashed rule."""
    if weekly is None or weekly.empty:
        return None
    base = alt.Chart(weekly).encode(x=alt.X("week:O", title="Week"))
    line = base.mark_line(color="#ff7f0e", point=True).encode(
        y=alt.Y("closure_rate:Q", title="Closure Rate (%)"),
        tooltip=[
            alt.Tooltip("week_label:N", title="Week"),
            alt.Tooltip("closure_rate:Q", title="Closure Rate", format=".2f"),
            alt.Tooltip("open_at_start:Q", title="Open at Start"),
            alt.Tooltip("new_issues:Q", title="New"),
            alt.Tooltip("closed_issues:Q", title="Closed"),
        ],
    )
    if average is None:
        return line.properties(height=280)
    rule = (
        alt.Chart(pd.DataFrame({"average": [average]}))
        .mark_rule(color="#7f7f7f", strokeDash=[4, 4])
        .encode(y="average:Q", tooltip=[alt.Tooltip("average:Q", title="Average", format=".2f")])
    )
    return (line + rule).properties(height=280)
