"""Load team rosters from JSON or YAML.

Roster files map a project key to its members, in column order::

    {"FN": {"team": ["helio.medeiros", "julio.medeiros"]}}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config import default_roster_path
from .errors import AllocationError, TeamNotFoundError
from .models import Team

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TeamRoster:
    teams: dict[str, Team] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TeamRoster:
        teams: dict[str, Team] = {}
        for project, entry in data.items():
            members = entry.get("team") if isinstance(entry, Mapping) else entry
            if not isinstance(members, list):
                raise AllocationError(f"team entry for {project} must list its members under 'team'")
            teams[str(project)] = Team(project=str(project), members=tuple(str(m) for m in members))
        return cls(teams=teams)

    def get_team(self, project: str) -> Team:
        team = self.teams.get(project)
        if team is None:
            raise TeamNotFoundError(project)
        return team

    def projects(self) -> list[str]:
        return sorted(self.teams)


def load_team_roster(path: str | Path | None = None) -> TeamRoster:
    """Read the roster file; a missing file yields an empty roster."""
    roster_path = Path(path) if path is not None else default_roster_path()
    if not roster_path.exists():
        logger.info("No roster found at %s, no teams configured", roster_path)
        return TeamRoster()
    text = roster_path.read_text(encoding="utf-8")
    try:
        if roster_path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text) if text.strip() else {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise AllocationError(f"failed to parse teams roster {roster_path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise AllocationError(f"teams roster {roster_path} must be a mapping of project keys")
    roster = TeamRoster.from_mapping(data)
    logger.info("Loaded %d team(s) from %s", len(roster.teams), roster_path)
    return roster
