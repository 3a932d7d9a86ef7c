"""Sprint allocation page.

Fetches the sprint's issues, computes each member's share of load per issue,
and offers the quoted CSV report for download.
"""

from __future__ import annotations

import streamlit as st

from sprint_alloc.app import ALLOCATION_PAGE, SERVICE_KEY, register_page
from sprint_alloc.core.config import SETTINGS
from sprint_alloc.core.errors import IssueFetchError, OverridePayloadError, TeamNotFoundError
from sprint_alloc.core.service import AllocationResult, AllocationService
from sprint_alloc.visual.charts import person_load_chart
from sprint_alloc.visual.progress import ProgressReporter
from sprint_alloc.visual.tables import render_allocation_table


@register_page(ALLOCATION_PAGE)
def allocation_page():
    st.title("Sprint Time Allocation")
    st.caption("Hours and share of sprint load per team member, reconstructed from status history.")
    service: AllocationService | None = st.session_state.get(SERVICE_KEY)
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    projects = service.projects()
    if not projects:
        st.warning("No teams configured in the roster file.")
        return
    col1, col2 = st.columns(2)
    project = col1.selectbox("Project", projects)
    sprint = col2.text_input("Sprint name or ID", value=st.session_state.get("sprint_name", ""))
    overrides = st.text_area(
        "Manual adjustments (JSON)",
        value=st.session_state.get("override_payload", ""),
        placeholder='{"ISSUE-1": 6, "ISSUE-2": 36}',
        help="Issue key to hours; replaces the computed duration for that issue.",
    )
    run = st.button("Calculate Allocation", type="primary")

    if run:
        if not sprint.strip():
            st.error("Sprint is required.")
            return
        st.session_state["sprint_name"] = sprint
        st.session_state["override_payload"] = overrides
        reporter = ProgressReporter(f"Allocating {project} / {sprint}")
        try:
            result = service.allocate(project, sprint.strip(), overrides, progress=reporter.callback)
        except (TeamNotFoundError, OverridePayloadError, IssueFetchError) as exc:
            reporter.error(str(exc))
            return
        st.session_state["allocation_result"] = result
        reporter.complete(f"Allocated {len(result.rows)} issue(s).")

    result: AllocationResult | None = st.session_state.get("allocation_result")
    if result is None:
        st.info("No allocation computed yet.")
        return
    if not result.rows:
        st.info(f"No eligible issues for {result.project} sprint {result.sprint}.")
        return

    st.markdown("---")
    st.subheader("Load per member")
    st.dataframe(result.person_summary(), hide_index=True)
    chart = person_load_chart(result.rows, result.team.members)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)

    st.subheader("Issues")
    server = st.session_state.get("jira_server", "")
    render_allocation_table(result.frame(), server)
    st.download_button(
        "Download Allocation CSV",
        data=result.csv.encode(SETTINGS.download_encoding),
        file_name=f"allocation_{result.project}_{result.sprint}.csv".replace(" ", "_"),
        mime="text/csv",
    )
