"""AllocationService: orchestrates fetching, mapping, and the allocation engine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

import pandas as pd
import pytz

from sprint_alloc.analytics.allocation.aggregation import aggregate_hours
from sprint_alloc.analytics.allocation.normalizer import normalize_load
from sprint_alloc.analytics.allocation.report import build_report, rows_to_dataframe

from .config import CHANGELOG_HYDRATION_MAX_WORKERS, CHANGELOG_HYDRATION_MIN_PARALLEL, JIRA_FETCH_BASE_FIELDS
from .errors import IssueFetchError
from .jira_client import JiraAPI
from .mappers import map_items
from .models import Item, ReportRow, Team
from .overrides import parse_overrides
from .teams import TeamRoster, load_team_roster

DEFAULT_FIELDS: Sequence[str] = tuple(JIRA_FETCH_BASE_FIELDS)
ProgressCallback = Callable[[str, int | None, int | None], None]
Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


class IssueFetcher(Protocol):
    def fetch_sprint_items(
        self,
        project: str,
        sprint: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[Item]: ...


class JiraItemFetcher:
    """Fetch a sprint's issues with complete changelogs and map them to Items."""

    def __init__(self, api: JiraAPI):
        self.api = api

    def fetch_sprint_items(
        self,
        project: str,
        sprint: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[Item]:
        if progress:
            progress(f"Querying issues for {project} / {sprint}", None, None)
        raw = self.api.search_sprint(project, sprint, DEFAULT_FIELDS)
        self._inflate_truncated_changelogs(raw, progress=progress)
        return map_items(raw)

    def _inflate_truncated_changelogs(
        self,
        raw_issues: list[dict[str, Any]],
        *,
        progress: ProgressCallback | None = None,
    ) -> None:
        """Replace truncated changelog histories with the full list (in-place).

        Search results embed at most one page of histories but report the
        real count in ``changelog.total``; the single-issue fetch returns all
        of them.
        """
        work: list[dict[str, Any]] = []
        for issue in raw_issues:
            changelog = issue.get("changelog") or {}
            histories = changelog.get("histories") or []
            total = changelog.get("total")
            if isinstance(total, int) and total > len(histories):
                work.append(issue)
        if not work:
            return

        label = "Loading complete change history"
        if progress:
            progress(label, 0, len(work))
        if len(work) < CHANGELOG_HYDRATION_MIN_PARALLEL:
            for idx, issue in enumerate(work, start=1):
                self._hydrate_single_issue(issue)
                if progress:
                    progress(label, idx, len(work))
            return

        # Parallel fetch using threads (I/O bound HTTP calls)
        from concurrent.futures import ThreadPoolExecutor, as_completed

        completed = 0
        with ThreadPoolExecutor(max_workers=CHANGELOG_HYDRATION_MAX_WORKERS) as pool:
            futures = [pool.submit(self._hydrate_single_issue, iss) for iss in work]
            for fut in as_completed(futures):
                try:
                    fut.result()
                except Exception as exc:  # pragma: no cover
                    logger.warning("Hydration task failed: %s", exc)
                finally:
                    completed += 1
                    if progress:
                        progress(label, completed, len(work))

    def _hydrate_single_issue(self, issue: dict[str, Any]) -> None:
        key = issue.get("key")
        if not key:
            return
        existing = (issue.get("changelog") or {}).get("histories") or []
        try:
            detail_changelog = self.api.fetch_changelog(key)
        except Exception as exc:
            logger.warning("Failed to hydrate changelog for %s: %s", key, exc)
            return
        new_histories = detail_changelog.get("histories") or []
        if len(new_histories) > len(existing):
            issue["changelog"] = detail_changelog
            logger.debug("Hydrated %s histories: %s -> %s", key, len(existing), len(new_histories))


@dataclass(slots=True)
class AllocationResult:
    project: str
    sprint: str
    team: Team
    rows: list[ReportRow] = field(default_factory=list)
    totals: dict[str, float] = field(default_factory=dict)
    csv: str = ""

    def frame(self) -> pd.DataFrame:
        return rows_to_dataframe(self.team, self.rows)

    def person_summary(self) -> pd.DataFrame:
        """Members in roster order with aggregated hours and item count."""
        counts: dict[str, int] = {person: 0 for person in self.team.members}
        for row in self.rows:
            counts[row.assignee] = counts.get(row.assignee, 0) + 1
        return pd.DataFrame(
            {
                "member": list(self.team.members),
                "total_hours": [self.totals.get(p, 0.0) for p in self.team.members],
                "items": [counts[p] for p in self.team.members],
            }
        )


class AllocationService:
    def __init__(
        self,
        fetcher: IssueFetcher,
        roster: TeamRoster,
        *,
        clock: Clock | None = None,
    ):
        self.fetcher = fetcher
        self.roster = roster
        self._clock = clock or (lambda: datetime.now(tz=pytz.UTC))

    def projects(self) -> list[str]:
        return self.roster.projects()

    def fetch_items(
        self,
        project: str,
        sprint: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[Item]:
        try:
            return self.fetcher.fetch_sprint_items(project, sprint, progress=progress)
        except Exception as exc:
            raise IssueFetchError(f"failed to fetch issues: {exc}") from exc

    def allocate(
        self,
        project: str,
        sprint: str,
        overrides: str | Mapping[str, float] | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> AllocationResult:
        """Run a full allocation report for one sprint.

        Parameters
        ----------
        project : str
            Project key; must exist in the roster.
        sprint : str
            Sprint name or id.
        overrides : str or Mapping[str, float], optional
            Manual hours per issue key, as a JSON payload or an already
            decoded mapping.
        progress : callback, optional
            Progress reporter.

        Raises
        ------
        TeamNotFoundError
            If ``project`` has no team.
        OverridePayloadError
            If the override payload is not valid JSON.
        IssueFetchError
            If issues could not be fetched.
        """
        team = self.roster.get_team(project)
        if overrides is None or isinstance(overrides, str):
            adjustments = parse_overrides(overrides)
        else:
            adjustments = {str(k): float(v) for k, v in overrides.items()}

        items = self.fetch_items(project, sprint, progress=progress)
        if progress:
            progress("Calculating time allocation", None, None)

        totals = aggregate_hours(team, items, adjustments)
        rows = normalize_load(team, items, adjustments, totals, sprint, now=self._clock())
        csv_text = build_report(team, rows)
        logger.info(
            "Allocated %d row(s) from %d issue(s) for %s sprint %s",
            len(rows),
            len(items),
            project,
            sprint,
        )
        return AllocationResult(
            project=project,
            sprint=sprint,
            team=team,
            rows=rows,
            totals=totals,
            csv=csv_text,
        )

    def process(self, project: str, sprint: str, overrides: str | None = None) -> str:
        """Return only the CSV text of :meth:`allocate`."""
        return self.allocate(project, sprint, overrides).csv


def connect(
    server: str,
    email: str,
    token: str,
    *,
    roster_path: str | None = None,
) -> AllocationService:
    """Build a Jira-backed AllocationService with the roster at ``roster_path``."""
    api = JiraAPI(server, email, token)
    return AllocationService(JiraItemFetcher(api), load_team_roster(roster_path))
