"""Exception types raised while producing an allocation report."""

from __future__ import annotations


class AllocationError(RuntimeError):
    """Base class for failures that abort a report run."""


class TeamNotFoundError(AllocationError):
    def __init__(self, project: str):
        super().__init__(f"project {project} not found in teams roster")
        self.project = project


class OverridePayloadError(AllocationError, ValueError):
    """The manual adjustments payload could not be decoded."""


class IssueFetchError(AllocationError):
    """Fetching sprint issues from the tracker failed."""


class JiraConfigError(AllocationError, ValueError):
    """Jira connection settings are missing or invalid."""
