"""Progress reporting for the issue fetch, rendered in Streamlit."""

from __future__ import annotations

import streamlit as st


class ProgressReporter:
    """Banner + progress bar driven by GitHubAPI/IssueService progress callbacks.

    ``total`` from the fetcher is the issue cap, so the bar fills as pages
    arrive and jumps to complete when the last (short) page ends the fetch.
    """

    def __init__(self, title: str):
        self._container = st.container()
        self._container.info(title)
        self._message_placeholder = self._container.empty()
        self._progress_placeholder = self._container.progress(0.0)
        self._ratio = 0.0
        self._finalized = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        if self._finalized:
            return
        if current is not None and total:
            self._ratio = min(max(current / total, self._ratio), 1.0)
        self._message_placeholder.write(message)
        self._progress_placeholder.progress(self._ratio)

    def complete(self, message: str) -> None:
        if self._finalized:
            return
        self._progress_placeholder.progress(1.0)
        self._container.success(message)
        self._finalized = True

    def fail(self, message: str, *, informational: bool = False) -> None:
        if self._finalized:
            return
        self._progress_placeholder.empty()
        if informational:
            self._container.info(message)
        else:
            self._container.error(message)
        self._finalized = True
