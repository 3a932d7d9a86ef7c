"""Central configuration, constants, and shared column definitions."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from .errors import JiraConfigError

# =============================================================================
# Jira Connection Settings
# =============================================================================
ENV_JIRA_BASE_URL = "JIRA_BASE_URL"
ENV_JIRA_EMAIL = "JIRA_EMAIL"
ENV_JIRA_TOKEN = "JIRA_TOKEN"


@dataclass(slots=True, frozen=True)
class JiraSettings:
    base_url: str
    email: str
    token: str

    def validate(self) -> None:
        if not self.base_url:
            raise JiraConfigError(f"{ENV_JIRA_BASE_URL} environment variable is not set")
        parsed = urlparse(self.base_url)
        if not parsed.scheme.startswith("http") or not parsed.netloc:
            raise JiraConfigError(f"{ENV_JIRA_BASE_URL} must be a valid URL")
        if not self.email:
            raise JiraConfigError(f"{ENV_JIRA_EMAIL} environment variable is not set")
        if not self.token:
            raise JiraConfigError(f"{ENV_JIRA_TOKEN} environment variable is not set")


def load_jira_settings(environ: Mapping[str, str] | None = None) -> JiraSettings:
    """Read and validate Jira connection settings from the environment.

    Parameters
    ----------
    environ : Mapping[str, str], optional
        Source of variables; defaults to ``os.environ``.

    Returns
    -------
    JiraSettings
        Validated settings.

    Raises
    ------
    JiraConfigError
        If a variable is missing or the base URL is not an http(s) URL.
    """
    env = os.environ if environ is None else environ
    settings = JiraSettings(
        base_url=(env.get(ENV_JIRA_BASE_URL) or "").strip(),
        email=(env.get(ENV_JIRA_EMAIL) or "").strip(),
        token=(env.get(ENV_JIRA_TOKEN) or "").strip(),
    )
    settings.validate()
    return settings


# =============================================================================
# Team Roster Location
# =============================================================================
ENV_ALLOC_HOME = "SPRINT_ALLOC_HOME"
ROSTER_DIRNAME = ".sprint_alloc"
ROSTER_FILENAMES: Sequence[str] = ("teams.json", "teams.yaml", "teams.yml")


def default_roster_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the first existing roster file under the home dir (or teams.json)."""
    env = os.environ if environ is None else environ
    base = Path(env.get(ENV_ALLOC_HOME) or ".") / ROSTER_DIRNAME
    for name in ROSTER_FILENAMES:
        candidate = base / name
        if candidate.exists():
            return candidate
    return base / ROSTER_FILENAMES[0]


# =============================================================================
# Workflow Status Configuration
# =============================================================================
# Status names are matched exactly as Jira reports them.
STATUS_IN_PROGRESS = "In Progress"
STATUS_DONE = "Done"
STATUS_WONT_DO = "Won't Do"

TERMINAL_STATUSES: frozenset[str] = frozenset({STATUS_DONE, STATUS_WONT_DO})

# Issue types that never count towards a person's load
SUBTASK_ISSUE_TYPES: frozenset[str] = frozenset({"Sub-task", "Subtask"})

STATUS_FIELD = "status"

# =============================================================================
# Timestamps
# =============================================================================
# Jira changelog format, e.g. 2024-03-20T10:00:00.000+0000
JIRA_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
REPORT_DATE_FORMAT = "%Y-%m-%d"

# =============================================================================
# Allocation Policy
# =============================================================================
# Completed same-day items are never reported below this many hours.
SAME_DAY_MIN_HOURS: float = 1.0
# Window assumed for an item with no usable timestamp at all.
OPEN_ITEM_FALLBACK_HOURS: float = 8.0

# =============================================================================
# Jira Custom Field IDs
# =============================================================================
FIELD_IDS = {
    "work_type": "customfield_10014",
    "asset_name": "customfield_10015",
}

# Capitalization labels; the label itself is the work type
WORK_TYPE_LABELS: frozenset[str] = frozenset({"cap-maintenance", "cap-discovery", "cap-development"})

# Canonical field list for sprint fetches (changelog comes through expand)
JIRA_FETCH_BASE_FIELDS = [
    "summary",
    "assignee",
    "status",
    "issuetype",
    "labels",
    FIELD_IDS["work_type"],
    FIELD_IDS["asset_name"],
]

# Changelog hydration tuning. Search results may embed a truncated history;
# those issues are refetched one by one.
CHANGELOG_HYDRATION_MAX_WORKERS = 8
CHANGELOG_HYDRATION_MIN_PARALLEL = 4  # below this, stay sequential

# =============================================================================
# Report Layout
# =============================================================================
REPORT_BASE_COLUMNS: Sequence[str] = (
    "sprint",
    "issueKey",
    "issueType",
    "issueTitle",
    "workType",
    "assetName",
    "status",
    "dateStarted",
    "dateCompleted",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"


SETTINGS = AppSettings()
