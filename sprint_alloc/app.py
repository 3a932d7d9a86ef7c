"""Streamlit navigation between the setup and allocation pages."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import streamlit as st

SETUP_PAGE = "Setup / Connection"
ALLOCATION_PAGE = "Sprint Allocation"
SERVICE_KEY = "allocation_service"

PAGES: dict[str, Callable[[], None]] = {}


def register_page(label: str):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def landing_page(session_state: Mapping[str, Any]) -> str:
    """Setup until a service is connected, the allocation page afterwards."""
    return ALLOCATION_PAGE if SERVICE_KEY in session_state else SETUP_PAGE


def main():
    st.sidebar.title("Sprint Time Allocation")
    labels = [label for label in (ALLOCATION_PAGE, SETUP_PAGE) if label in PAGES]
    if not labels:
        st.write("No pages registered yet.")
        return
    landing = landing_page(st.session_state)
    page = st.sidebar.radio("Page", labels, index=labels.index(landing) if landing in labels else 0)
    PAGES[page]()
