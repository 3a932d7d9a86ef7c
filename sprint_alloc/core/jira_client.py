"""Jira REST v3 access for sprint allocation: sprint search and issue changelogs."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Any

from jira import JIRA, JIRAError

logger = logging.getLogger(__name__)

SEARCH_PATH = "/rest/api/3/search/jql"
SPRINT_ORDER = "ORDER BY resolved ASC, created DESC"


def sprint_jql(project: str, sprint: str) -> str:
    """JQL selecting every issue of ``project`` in ``sprint`` (name or numeric id)."""
    sprint = str(sprint).strip()
    if sprint.isdigit():
        sprint_clause = sprint
    else:
        escaped = sprint.replace("'", "\\'")
        sprint_clause = f"'{escaped}'"
    return f"project = {project} AND sprint = {sprint_clause} {SPRINT_ORDER}"


class JiraAPI:
    """Sprint-scoped Jira client. Sprint searches are never cached."""

    def __init__(self, server: str, email: str, token: str, *, page_size: int = 100):
        self.server = server.rstrip("/")
        self.page_size = page_size
        self.client = JIRA(
            basic_auth=(email, token), options={"server": self.server, "rest_api_version": "3"}
        )

    def search_sprint(
        self,
        project: str,
        sprint: str,
        fields: Sequence[str],
    ) -> list[dict[str, Any]]:
        """Return the raw issues of one sprint with their changelogs embedded."""
        jql = sprint_jql(project, sprint)
        issues = list(self._search_pages(jql, fields))
        logger.info("Sprint %s / %s: %d issue(s)", project, sprint, len(issues))
        return issues

    def _search_pages(self, jql: str, fields: Sequence[str]) -> Iterator[dict[str, Any]]:
        """Walk the enhanced search endpoint page by page (``nextPageToken``)."""
        session = getattr(self.client, "_session", None)
        if session is None:
            raise RuntimeError("JIRA session unavailable")
        params: dict[str, Any] = {
            "jql": jql,
            "maxResults": self.page_size,
            "fields": ",".join(fields),
            "expand": "changelog",
        }
        token = None
        page = 0
        while True:
            query = dict(params, nextPageToken=token) if token else params
            resp = session.get(f"{self.server}{SEARCH_PATH}", params=query)
            if resp.status_code >= 400:
                raise RuntimeError(f"Sprint search failed {resp.status_code}: {resp.text[:200]}")
            data = resp.json()
            page += 1
            batch = data.get("issues") or []
            logger.debug("Search page %d: %d issue(s)", page, len(batch))
            yield from batch
            token = data.get("nextPageToken")
            if not token or data.get("isLast") is True:
                return

    def fetch_changelog(self, issue_key: str) -> dict[str, Any]:
        """Full changelog of one issue (search results may truncate it)."""
        try:
            issue = self.client.issue(issue_key, expand="changelog")
        except JIRAError as exc:  # pragma: no cover - network error path
            raise RuntimeError(f"Failed to fetch changelog for {issue_key}: {exc}") from exc
        raw = getattr(issue, "raw", issue)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Unexpected issue payload type for {issue_key}: {type(raw)!r}")
        return raw.get("changelog") or {}
