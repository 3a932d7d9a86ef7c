"""Chart builders (Altair) for per-person sprint load."""

from __future__ import annotations

from collections.abc import Sequence

import altair as alt
import pandas as pd

from sprint_alloc.core.models import ReportRow


def load_frame(rows: Sequence[ReportRow]) -> pd.DataFrame:
    """Long-form hours per (assignee, issue) used by the load chart."""
    records = [
        {
            "assignee": row.assignee,
            "issueKey": row.issue_key,
            "issueTitle": row.issue_title,
            "hours": float(row.working_hours),
            "share": row.percentage,
        }
        for row in rows
    ]
    return pd.DataFrame(records, columns=["assignee", "issueKey", "issueTitle", "hours", "share"])


def person_load_chart(rows: Sequence[ReportRow], members: Sequence[str] | None = None):
    """Stacked horizontal bars: each person's hours split by issue.

    Returns None when there is nothing to plot.
    """
    data = load_frame(rows)
    if data.empty:
        return None
    order = list(members) if members else sorted(data["assignee"].unique())
    chart = (
        alt.Chart(data)
        .mark_bar()
        .encode(
            y=alt.Y("assignee:N", title="Team member", sort=order),
            x=alt.X("sum(hours):Q", title="Hours"),
            color=alt.Color("issueKey:N", title="Issue", legend=None),
            tooltip=[
                alt.Tooltip("assignee:N", title="Member"),
                alt.Tooltip("issueKey:N", title="Issue"),
                alt.Tooltip("issueTitle:N", title="Title"),
                alt.Tooltip("hours:Q", title="Hours", format=".2f"),
                alt.Tooltip("share:N", title="Share of load"),
            ],
        )
        .properties(height=max(120, 40 * len(order)))
    )
    return chart
