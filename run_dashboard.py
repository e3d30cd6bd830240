"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``gh_issues_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from gh_issues_app.app import main
from gh_issues_app.pages.setup import init_issue_service, load_settings

st.set_page_config(page_title="GitHub Issues Analyzer", layout="wide")

_SETTINGS = load_settings()
logging.basicConfig(
    level=getattr(logging, _SETTINGS.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def _auto_init_issue_service():
    """Initialize the GitHub service from secrets (or defaults) once per session."""
    if "issue_service" in st.session_state:
        return
    init_issue_service(_SETTINGS.api_url, _SETTINGS.request_timeout)
    logging.getLogger(__name__).info("IssueService initialized for %s", _SETTINGS.api_url)


_auto_init_issue_service()

PAGES_DIR = Path(__file__).parent / "gh_issues_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"gh_issues_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception:  # pragma: no cover - defensive
        logging.getLogger(__name__).exception("Failed importing page %s", mod_name)

if __name__ == "__main__":
    main()
