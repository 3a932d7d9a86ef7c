"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``sprint_alloc/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from sprint_alloc.app import SERVICE_KEY, main
from sprint_alloc.core.config import load_jira_settings
from sprint_alloc.core.errors import AllocationError

st.set_page_config(layout="wide")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _auto_init_allocation_service():
    """Initialize the service from Streamlit secrets, then the environment."""
    if SERVICE_KEY in st.session_state:
        return

    jira_secrets = st.secrets.get("jira", {})
    server = jira_secrets.get("JIRA_SERVER") or st.secrets.get("JIRA_SERVER")
    email = jira_secrets.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    token = (
        jira_secrets.get("JIRA_API_TOKEN")
        or st.secrets.get("JIRA_API_TOKEN")
        or jira_secrets.get("JIRA_TOKEN")
        or st.secrets.get("JIRA_TOKEN")
    )
    if not (server and email and token):
        try:
            settings = load_jira_settings()
        except AllocationError as exc:
            st.sidebar.warning(f"Jira credentials not found ({exc}). Please use the Setup page.")
            return
        server, email, token = settings.base_url, settings.email, settings.token

    st.sidebar.info("Credentials found, attempting to connect to Jira...")
    try:
        from sprint_alloc.core.service import connect

        st.session_state["jira_server"] = server
        st.session_state[SERVICE_KEY] = connect(server, email, token)
        st.sidebar.success("Jira connection successful!")
    except Exception as e:
        st.sidebar.error(f"Jira connection failed: {e}")
        if SERVICE_KEY in st.session_state:
            del st.session_state[SERVICE_KEY]


_auto_init_allocation_service()

PAGES_DIR = Path(__file__).parent / "sprint_alloc" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"sprint_alloc.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover
        logging.getLogger(__name__).error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
