"""Per-person hours aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from sprint_alloc.core.models import Item, Team
from sprint_alloc.core.status import is_subtask_type

from .changelog import resolve_interval
from .duration import resolve_hours


def eligible_items(team: Team, items: Iterable[Item]) -> Iterator[Item]:
    """Yield items assigned to a team member that are not sub-tasks."""
    for item in items:
        if item.assignee not in team:
            continue
        if is_subtask_type(item.issuetype):
            continue
        yield item


def aggregate_hours(
    team: Team,
    items: Iterable[Item],
    overrides: Mapping[str, float] | None = None,
) -> dict[str, float]:
    """Sum working hours per team member.

    Every member starts at 0 so people without work still appear. Items
    whose interval has no start are left out of the totals.
    """
    totals = {person: 0.0 for person in team.members}
    for item in eligible_items(team, items):
        interval = resolve_interval(item)
        if interval.start is None:
            continue
        totals[item.assignee] += resolve_hours(item.key, overrides, interval.start, interval.end)
    return totals
