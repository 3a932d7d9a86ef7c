"""Status and issue-type classification helpers.

Statuses are compared exactly as Jira reports them (``"In Progress"``,
``"Done"``, ``"Won't Do"``); the workflow names live in config.py.
"""

from __future__ import annotations

from .config import SUBTASK_ISSUE_TYPES, TERMINAL_STATUSES


def clean_status_name(value: str | None) -> str:
    """Sanitize a status string, converting null-like values to "".

    Parameters
    ----------
    value : str | None
        Raw status string.

    Returns
    -------
    str
        Stripped status string, or "" for empty/null-like values.
    """
    if not value:
        return ""
    text = str(value).strip()
    if text.lower() in {"nan", "none", "null"}:
        return ""
    return text


def is_terminal_status(value: str | None) -> bool:
    """True if the status closes an item (Done / Won't Do)."""
    return value in TERMINAL_STATUSES


def is_subtask_type(issuetype: str | None) -> bool:
    return issuetype in SUBTASK_ISSUE_TYPES
