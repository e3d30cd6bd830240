"""Issues Analyzer page.

Fetches up to the issue cap for one repository, then shows status counts,
ten weekly tables/charts and the full issue list.
"""

from __future__ import annotations

import streamlit as st

from gh_issues_app.app import register_page
from gh_issues_app.core.config import SETTINGS, WEEKS_ANALYZED
from gh_issues_app.core.models import AnalysisResult
from gh_issues_app.core.service import IssueService
from gh_issues_app.features.issues_overview import build_context
from gh_issues_app.features.issues_overview.runner import LEVEL_INFO, check_repo_path, run_analysis
from gh_issues_app.pages.setup import init_issue_service, load_settings
from gh_issues_app.visual.charts import closure_rate_chart, weekly_activity_chart
from gh_issues_app.visual.progress import ProgressReporter
from gh_issues_app.visual.tables import render_issue_table, render_week_table

RESULT_KEY = "analysis_result"
RUNNING_KEY = "analysis_running"


def _request_analysis():
    st.session_state[RUNNING_KEY] = True


def _get_service() -> IssueService:
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        settings = load_settings()
        service = init_issue_service(settings.api_url, settings.request_timeout)
    return service


def _analyze(repo_path: str) -> None:
    invalid = check_repo_path(repo_path)
    if invalid is not None:
        st.session_state.pop(RESULT_KEY, None)
        st.error(invalid.message)
        return
    reporter = ProgressReporter("Loading data...")
    outcome = run_analysis(_get_service(), repo_path, progress=reporter.callback)
    if not outcome.ok:
        st.session_state.pop(RESULT_KEY, None)
        reporter.fail(outcome.message or "Analysis failed.", informational=outcome.level == LEVEL_INFO)
        return
    st.session_state[RESULT_KEY] = outcome.result
    reporter.complete(f"Analyzed {outcome.result.status_counts.total} issue(s).")


def _render_result(result: AnalysisResult) -> None:
    ctx = build_context(result)
    st.markdown("---")
    st.header(f"Repository Analysis: {ctx.repo_path}")
    st.subheader("Issues Metrics")

    status_col, counts_col = st.columns([1, 2])
    with status_col:
        st.markdown("#### Status Counts")
        counts = result.status_counts
        st.metric("Open Issues", counts.open)
        st.metric("Closed Issues", counts.closed)
        st.metric("Total Issues", counts.total)
    with counts_col:
        st.markdown(f"#### Weekly Issue Count (Last {WEEKS_ANALYZED} Weeks)")
        render_week_table(ctx.weekly_counts)

    ratio_col, closure_col = st.columns(2)
    with ratio_col:
        st.markdown("#### New vs Closed Ratio")
        render_week_table(ctx.weekly_ratio)
    with closure_col:
        st.markdown("#### Weekly Closure Rate")
        render_week_table(ctx.weekly_closure)

    avg_col, chart_col = st.columns([1, 2])
    with avg_col:
        st.markdown("#### Average Weekly Closure Rate")
        st.markdown(f"## {ctx.average_closure_display}")
    with chart_col:
        tab_activity, tab_rate = st.tabs(["New vs Closed", "Closure Rate"])
        with tab_activity:
            chart = weekly_activity_chart(ctx.weekly)
            if chart is not None:
                st.altair_chart(chart, use_container_width=True)
        with tab_rate:
            chart = closure_rate_chart(ctx.weekly, ctx.average_closure_rate)
            if chart is not None:
                st.altair_chart(chart, use_container_width=True)

    if st.toggle("Show All Issues", key="show_all_issues"):
        st.markdown("#### Issues List")
        render_issue_table(ctx.issue_list)
        if not ctx.issue_list.empty:
            export_cols = ["number", "title", "state", "created_date", "updated_date", "html_url"]
            csv = ctx.issue_list[export_cols].to_csv(index=False).encode(SETTINGS.download_encoding)
            st.download_button(
                "Download Issues CSV",
                data=csv,
                file_name=f"github_issues_{ctx.repo_path.replace('/', '_')}.csv",
                mime="text/csv",
            )


@register_page("Issues Analyzer")
def analyzer_page():
    st.title("GitHub Issues Analyzer")
    running = bool(st.session_state.get(RUNNING_KEY))
    repo_path = st.text_input(
        "GitHub Repository (format: owner/repo):",
        placeholder="e.g., facebook/react",
        key="repo_path",
    )
    st.button("Analyze Issues", type="primary", on_click=_request_analysis, disabled=running)

    if running:
        try:
            _analyze(repo_path)
        finally:
            st.session_state[RUNNING_KEY] = False

    result: AnalysisResult | None = st.session_state.get(RESULT_KEY)
    if result is not None:
        _render_result(result)
