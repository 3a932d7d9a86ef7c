"""Connection setup page: collect Jira credentials and initialize AllocationService."""

from __future__ import annotations

import streamlit as st

from sprint_alloc.app import SERVICE_KEY, SETUP_PAGE, register_page
from sprint_alloc.core.config import default_roster_path
from sprint_alloc.core.errors import AllocationError
from sprint_alloc.core.service import connect


@register_page(SETUP_PAGE)
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    # Pre-fill from secrets if available (user can override)
    jira_secrets = st.secrets.get("jira", {})
    secret_server = jira_secrets.get("JIRA_SERVER") or st.secrets.get("JIRA_SERVER")
    secret_email = jira_secrets.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    secret_token = (
        jira_secrets.get("JIRA_API_TOKEN")
        or st.secrets.get("JIRA_API_TOKEN")
        or jira_secrets.get("JIRA_TOKEN")
        or st.secrets.get("JIRA_TOKEN")
    )

    server = st.text_input(
        "Jira Server URL",
        value=st.session_state.get("jira_server") or secret_server or "",
    )
    email = st.text_input(
        "Email / Username",
        value=st.session_state.get("jira_email") or secret_email or "",
    )
    token = st.text_input(
        "API Token",
        type="password",
        value=secret_token or "",
    )
    roster_path = st.text_input(
        "Teams roster file (JSON or YAML)",
        value=st.session_state.get("roster_path") or str(default_roster_path()),
    )
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not (server and email and token):
            st.error("All fields required.")
            return
        try:
            service = connect(server, email, token, roster_path=roster_path or None)
            st.session_state["jira_server"] = server
            st.session_state["jira_email"] = email
            st.session_state["roster_path"] = roster_path
            st.session_state[SERVICE_KEY] = service
            st.success("Connection initialized.")
        except AllocationError as e:
            st.error(str(e))
        except Exception as e:  # pragma: no cover
            st.error(f"Failed to initialize Jira client: {e}")

    service = st.session_state.get(SERVICE_KEY)
    if service is not None:
        projects = service.projects()
        if projects:
            st.info(f"AllocationService ready. Teams: {', '.join(projects)}")
        else:
            st.warning("AllocationService ready, but the roster has no teams.")
