"""Domain data models for sprint items, change histories, and report rows."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

from .config import STATUS_FIELD


@dataclass(slots=True, frozen=True)
class FieldChange:
    field: str | None
    from_value: str | None
    to_value: str | None

    @property
    def is_status_change(self) -> bool:
        return self.field == STATUS_FIELD


@dataclass(slots=True, frozen=True)
class ChangeEvent:
    created: str | None
    items: tuple[FieldChange, ...] = ()

    def status_changes(self) -> Iterator[FieldChange]:
        return (item for item in self.items if item.is_status_change)


@dataclass(slots=True, frozen=True)
class Item:
    key: str
    summary: str = ""
    assignee: str = ""
    status: str = ""
    issuetype: str = ""
    work_type: str = ""
    asset_name: str = ""
    labels: tuple[str, ...] = ()
    changelog: tuple[ChangeEvent, ...] = ()


@dataclass(slots=True, frozen=True)
class Team:
    project: str
    members: tuple[str, ...] = ()

    def __contains__(self, person: object) -> bool:
        return person in self.members

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)


@dataclass(slots=True, frozen=True)
class WorkInterval:
    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.start is not None and self.end is None


@dataclass(slots=True)
class ReportRow:
    sprint: str
    issue_key: str
    issue_type: str
    issue_title: str
    work_type: str
    asset_name: str
    status: str
    date_started: str
    date_completed: str
    assignee: str
    working_hours: float
    percentage: str
    person_total_hours: float = 0.0
    allocations: dict[str, str] = field(default_factory=dict)

    def as_record(self) -> dict[str, str]:
        """Flatten into report column names (members appended in mapping order)."""
        record = {
            "sprint": self.sprint,
            "issueKey": self.issue_key,
            "issueType": self.issue_type,
            "issueTitle": self.issue_title,
            "workType": self.work_type,
            "assetName": self.asset_name,
            "status": self.status,
            "dateStarted": self.date_started,
            "dateCompleted": self.date_completed,
        }
        record.update(self.allocations)
        return record
