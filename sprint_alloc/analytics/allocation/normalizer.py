"""Percentage-of-load normalization.

Each eligible item is measured once: its interval (with fallbacks when no
start could be resolved), its working hours, and the same-day floor. Pass one
sums the floored hours per person; pass two turns every item into a report
row whose percentage is relative to that per-person sum.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta

import pytz

from sprint_alloc.core.config import OPEN_ITEM_FALLBACK_HOURS, REPORT_DATE_FORMAT, SAME_DAY_MIN_HOURS
from sprint_alloc.core.models import Item, ReportRow, Team
from sprint_alloc.core.status import is_terminal_status

from .aggregation import eligible_items
from .changelog import parse_timestamp, resolve_interval
from .duration import resolve_hours


@dataclass(slots=True, frozen=True)
class ItemTiming:
    item: Item
    start: datetime
    end: datetime | None
    hours: float


def measure_item(
    item: Item,
    overrides: Mapping[str, float] | None,
    now: datetime,
) -> ItemTiming:
    """Resolve the start/end/hours used for percentage calculations.

    Parameters
    ----------
    item : Item
        An eligible item.
    overrides : Mapping[str, float] or None
        Manual hours per item key.
    now : datetime
        Reference time for items with no usable timestamp at all.

    Returns
    -------
    ItemTiming
        Start is always set; end may be None for items still open.
    """
    interval = resolve_interval(item)
    start, end = interval.start, interval.end
    if start is None and item.changelog:
        start = parse_timestamp(item.changelog[0].created)
    if start is None:
        end = now
        start = now - timedelta(hours=OPEN_ITEM_FALLBACK_HOURS)

    hours = resolve_hours(item.key, overrides, start, end)

    if (
        hours < SAME_DAY_MIN_HOURS
        and end is not None
        and start.date() == end.date()
        and is_terminal_status(item.status)
    ):
        hours = SAME_DAY_MIN_HOURS

    return ItemTiming(item=item, start=start, end=end, hours=hours)


def format_percentage(hours: float, person_hours: float) -> str:
    if person_hours == 0:
        return f"{0.0:.2f}%"
    return f"{hours / person_hours * 100:.2f}%"


def normalize_load(
    team: Team,
    items: Iterable[Item],
    overrides: Mapping[str, float] | None,
    totals: Mapping[str, float],
    sprint: str,
    *,
    now: datetime | None = None,
) -> list[ReportRow]:
    """Build one report row per eligible item with its share of the assignee's load.

    ``totals`` are the aggregated hours per person; they are carried on each
    row for display and do not take part in the percentage, which is always
    relative to the floored per-person sum computed here.
    """
    now = now or datetime.now(tz=pytz.UTC)
    timings = [measure_item(item, overrides, now) for item in eligible_items(team, items)]

    person_hours: defaultdict[str, float] = defaultdict(float)
    for timing in timings:
        person_hours[timing.item.assignee] += timing.hours

    rows: list[ReportRow] = []
    for timing in timings:
        item = timing.item
        assignee = item.assignee
        completed = is_terminal_status(item.status) and timing.end is not None
        percentage = format_percentage(timing.hours, person_hours[assignee])

        allocations = {person: "" for person in team.members}
        allocations[assignee] = percentage

        rows.append(
            ReportRow(
                sprint=sprint,
                issue_key=item.key,
                issue_type=item.issuetype,
                issue_title=item.summary,
                work_type=item.work_type,
                asset_name=item.asset_name,
                status=item.status,
                date_started=timing.start.strftime(REPORT_DATE_FORMAT),
                date_completed=timing.end.strftime(REPORT_DATE_FORMAT) if completed else "",
                assignee=assignee,
                working_hours=timing.hours,
                percentage=percentage,
                person_total_hours=float(totals.get(assignee, 0.0)),
                allocations=allocations,
            )
        )
    return rows
