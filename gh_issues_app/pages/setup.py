"""Connection setup page: choose the GitHub API endpoint and initialize IssueService."""

from __future__ import annotations

import streamlit as st

from gh_issues_app.app import register_page
from gh_issues_app.core.config import SETTINGS, AppSettings, settings_from_secrets
from gh_issues_app.core.github_client import GitHubAPI
from gh_issues_app.core.service import IssueService


def load_settings() -> AppSettings:
    """Settings overlaid with Streamlit secrets, or the defaults when no secrets file exists."""
    try:
        return settings_from_secrets(st.secrets)
    except FileNotFoundError:
        return SETTINGS


def init_issue_service(api_url: str, timeout: float) -> IssueService:
    """Build a fresh service and make it the session's active one."""
    service = IssueService(GitHubAPI(api_url, timeout=timeout))
    st.session_state["github_api_url"] = service.api.server
    st.session_state["issue_service"] = service
    return service


@register_page("Setup / Connection")
def setup_page():
    st.title("GitHub Connection Setup")
    st.caption("Public repositories only; requests are unauthenticated (60 requests/hour).")

    defaults = load_settings()
    api_url = st.text_input(
        "GitHub API URL",
        value=st.session_state.get("github_api_url") or defaults.api_url,
        help="Use https://<host>/api/v3 for GitHub Enterprise Server.",
    )
    timeout = st.number_input(
        "Request timeout (seconds)",
        min_value=1.0,
        max_value=300.0,
        value=float(defaults.request_timeout),
        step=5.0,
    )
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not api_url.strip():
            st.error("API URL required.")
            return
        init_issue_service(api_url.strip(), float(timeout))
        st.success("Connection initialized.")

    if "issue_service" in st.session_state:
        st.info(f"IssueService ready ({st.session_state['github_api_url']}).")
