"""Table helpers for rendering allocation reports in Streamlit."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from sprint_alloc.core.config import SETTINGS


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "issueKey", label: str = "Ticket"):
    if df.empty or key_col not in df.columns or not server:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        )
    }
    return out, cfg


def prepare_allocation_table(
    df: pd.DataFrame,
    server: str,
) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    """Put the ticket link first and keep the report column order after it."""
    if df.empty:
        return df, [], {}
    table, cfg = add_ticket_link(df, server)
    display_cols = list(df.columns)
    if "Ticket" in table.columns:
        display_cols.insert(0, "Ticket")
    return table, display_cols, cfg


def render_allocation_table(df: pd.DataFrame, server: str, limit: int | None = None):
    table, cols, cfg = prepare_allocation_table(df, server)
    if not cols:
        st.info("No eligible issues for this sprint.")
        return
    st.dataframe(table[cols].head(limit or SETTINGS.max_table_rows), hide_index=True, column_config=cfg)
