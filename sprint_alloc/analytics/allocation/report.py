"""Tabular report emission (DataFrame + fully quoted CSV)."""

from __future__ import annotations

import csv
from collections.abc import Sequence

import pandas as pd

from sprint_alloc.core.config import REPORT_BASE_COLUMNS
from sprint_alloc.core.models import ReportRow, Team


def report_columns(team: Team) -> list[str]:
    return [*REPORT_BASE_COLUMNS, *team.members]


def rows_to_dataframe(team: Team, rows: Sequence[ReportRow]) -> pd.DataFrame:
    """Lay rows out in report column order; missing cells become ""."""
    columns = report_columns(team)
    if not rows:
        return pd.DataFrame(columns=columns)
    records = [row.as_record() for row in rows]
    return pd.DataFrame.from_records(records, columns=columns).fillna("")


def build_report(team: Team, rows: Sequence[ReportRow]) -> str:
    """Serialize rows to CSV with every field quoted and ``\\n`` line endings.

    An empty row set produces an empty string, header included.
    """
    if not rows:
        return ""
    frame = rows_to_dataframe(team, rows)
    return frame.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
