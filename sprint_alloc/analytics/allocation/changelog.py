"""Work interval reconstruction from an item's status changelog.

The walk is a three-state machine over status transitions:

``IDLE``
    Not being worked (initial state, or paused out of progress).
``ACTIVE``
    Inside an "In Progress" period.
``COMPLETED``
    Last seen transition went into a terminal status (Done / Won't Do).

The interval start is the *first* entry into progress and never moves once
fixed; the end is the *last* terminal transition. Items closed without an
observed progress period start and end at the closing time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import pandas as pd
import pytz

from sprint_alloc.core.config import JIRA_TIMESTAMP_FORMAT, STATUS_IN_PROGRESS
from sprint_alloc.core.models import FieldChange, Item, WorkInterval
from sprint_alloc.core.status import is_terminal_status


def parse_timestamp(value) -> datetime | None:
    """Parse a changelog timestamp into a UTC datetime.

    Accepts the Jira fixed-offset format (``2024-03-20T10:00:00.000+0000``)
    and RFC 3339 (``2024-03-20T10:00:00Z``). Values without an explicit
    offset, or that match neither format, yield None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return None
        return value.astimezone(pytz.UTC)
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, JIRA_TIMESTAMP_FORMAT).astimezone(pytz.UTC)
    except ValueError:
        pass
    ts = pd.to_datetime(text, format="ISO8601", errors="coerce")
    if ts is None or pd.isna(ts) or ts.tzinfo is None:
        return None
    return ts.tz_convert(pytz.UTC).to_pydatetime()


class WalkState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(slots=True)
class ChangeLogWalker:
    """Accumulates status transitions for a single item.

    ``segments`` records every closed in-progress span (entry, exit) so pause
    and resume cycles can be inspected; the reported interval is not
    shortened by pauses.
    """

    state: WalkState = WalkState.IDLE
    start: datetime | None = None
    end: datetime | None = None
    segments: list[tuple[datetime, datetime]] = field(default_factory=list)
    _first_progress: datetime | None = None
    _segment_start: datetime | None = None

    def feed(self, when: datetime, change: FieldChange) -> None:
        """Apply one status change observed at ``when``."""
        to_status = change.to_value
        terminal = is_terminal_status(to_status)

        if to_status == STATUS_IN_PROGRESS:
            if self._first_progress is None:
                self._first_progress = when
            self.start = self._first_progress
            if self.state is not WalkState.ACTIVE:
                self._segment_start = when
            self.state = WalkState.ACTIVE

        if terminal:
            self.end = when
            if self.start is None:
                self.start = when
            self._close_segment(when)
            self.state = WalkState.COMPLETED

        # Leaving progress for a non-terminal status is a pause.
        if (
            self.state is WalkState.ACTIVE
            and change.from_value == STATUS_IN_PROGRESS
            and to_status != STATUS_IN_PROGRESS
            and not terminal
        ):
            self._close_segment(when)
            self.state = WalkState.IDLE

    def _close_segment(self, when: datetime) -> None:
        if self._segment_start is not None:
            self.segments.append((self._segment_start, when))
            self._segment_start = None

    def interval(self) -> WorkInterval:
        start, end = self.start, self.end
        if start is not None and end is not None and end < start:
            start, end = end, start
        return WorkInterval(start=start, end=end)

    def walk(self, item: Item) -> WorkInterval:
        """Feed every parsable status change of ``item`` in the given order."""
        for event in item.changelog:
            when = parse_timestamp(event.created)
            if when is None:
                continue
            for change in event.status_changes():
                self.feed(when, change)
        return self.interval()


def resolve_interval(item: Item) -> WorkInterval:
    """Reconstruct the (start, end) active-work interval of ``item``."""
    return ChangeLogWalker().walk(item)
