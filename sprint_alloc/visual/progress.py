"""Progress reporting for long-running Streamlit actions."""

from __future__ import annotations

import streamlit as st

from sprint_alloc.core.service import ProgressCallback


class ProgressReporter:
    """Banner + progress bar driven by AllocationService progress callbacks."""

    def __init__(self, title: str):
        self._container = st.container()
        self._container.info(title)
        self._message_placeholder = self._container.empty()
        self._progress_placeholder = self._container.progress(0.0)
        self._finalized: bool = False

    @property
    def callback(self) -> ProgressCallback:
        return self.update

    def update(self, message: str, current: int | None = None, total: int | None = None) -> None:
        if self._finalized:
            return
        self._message_placeholder.write(message)
        if total and current is not None:
            # Unknown totals leave the bar where it was.
            self._progress_placeholder.progress(min(max(current / total, 0.0), 1.0))

    def complete(self, message: str) -> None:
        if self._finalized:
            return
        self._progress_placeholder.progress(1.0)
        self._container.success(message)
        self._finalized = True

    def error(self, message: str) -> None:
        if self._finalized:
            return
        self._container.error(message)
        self._finalized = True
