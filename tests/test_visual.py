import pandas as pd

from sprint_alloc.core.models import ReportRow
from sprint_alloc.visual.charts import load_frame, person_load_chart
from sprint_alloc.visual.tables import add_ticket_link, prepare_allocation_table


def _row(key, assignee, hours, share):
    return ReportRow(
        sprint="Sprint 1",
        issue_key=key,
        issue_type="Story",
        issue_title=f"Work on {key}",
        work_type="",
        asset_name="",
        status="Done",
        date_started="2024-03-20",
        date_completed="2024-03-21",
        assignee=assignee,
        working_hours=hours,
        percentage=share,
    )


def test_load_frame_and_chart():
    rows = [_row("FN-1", "Alice", 29.0, "96.67%"), _row("FN-2", "Alice", 1.0, "3.33%"), _row("FN-3", "Bob", 4.0, "100.00%")]
    data = load_frame(rows)
    assert list(data.columns) == ["assignee", "issueKey", "issueTitle", "hours", "share"]
    assert data.groupby("assignee")["hours"].sum().to_dict() == {"Alice": 30.0, "Bob": 4.0}
    assert person_load_chart(rows, members=["Alice", "Bob"]) is not None


def test_chart_empty():
    assert load_frame([]).empty
    assert person_load_chart([]) is None


def test_add_ticket_link():
    df = pd.DataFrame({"issueKey": ["FN-1", "FN-2"], "status": ["Done", "Done"]})
    out, cfg = add_ticket_link(df, "https://example.atlassian.net/")
    assert list(out["Ticket"]) == [
        "https://example.atlassian.net/browse/FN-1",
        "https://example.atlassian.net/browse/FN-2",
    ]
    assert "Ticket" in cfg
    assert "Ticket" not in df.columns


def test_add_ticket_link_without_server():
    df = pd.DataFrame({"issueKey": ["FN-1"]})
    out, cfg = add_ticket_link(df, "")
    assert out is df
    assert cfg == {}


def test_prepare_allocation_table_puts_link_first():
    df = pd.DataFrame({"sprint": ["Sprint 1"], "issueKey": ["FN-1"], "Alice": ["100.00%"]})
    table, cols, _ = prepare_allocation_table(df, "https://example.atlassian.net")
    assert cols == ["Ticket", "sprint", "issueKey", "Alice"]
    assert table.loc[0, "Ticket"].endswith("/browse/FN-1")
