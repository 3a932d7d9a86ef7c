import json

import pytest

from sprint_alloc.core.errors import AllocationError, OverridePayloadError, TeamNotFoundError
from sprint_alloc.core.overrides import parse_overrides
from sprint_alloc.core.teams import TeamRoster, load_team_roster


def test_load_json_roster(tmp_path):
    path = tmp_path / "teams.json"
    path.write_text(json.dumps({"FN": {"team": ["helio.medeiros", "julio.medeiros"]}}))
    roster = load_team_roster(path)
    team = roster.get_team("FN")
    assert team.members == ("helio.medeiros", "julio.medeiros")
    assert "helio.medeiros" in team
    assert "someone.else" not in team
    assert roster.projects() == ["FN"]


def test_load_yaml_roster(tmp_path):
    path = tmp_path / "teams.yaml"
    path.write_text("FN:\n  team:\n    - Alice\n    - Bob\nOPS:\n  team: [Carol]\n")
    roster = load_team_roster(path)
    assert roster.get_team("FN").members == ("Alice", "Bob")
    assert roster.projects() == ["FN", "OPS"]


def test_missing_roster_is_empty(tmp_path):
    roster = load_team_roster(tmp_path / "nope.json")
    assert roster.projects() == []


def test_unknown_project_raises():
    roster = TeamRoster.from_mapping({"FN": {"team": ["Alice"]}})
    with pytest.raises(TeamNotFoundError, match="project XYZ not found in teams roster"):
        roster.get_team("XYZ")


def test_malformed_roster_raises(tmp_path):
    path = tmp_path / "teams.json"
    path.write_text("{not json")
    with pytest.raises(AllocationError):
        load_team_roster(path)
    path.write_text(json.dumps({"FN": {"team": "Alice"}}))
    with pytest.raises(AllocationError):
        load_team_roster(path)


def test_parse_overrides_valid():
    assert parse_overrides('{"ISSUE-1": 6, "ISSUE-2": 36.5}') == {"ISSUE-1": 6.0, "ISSUE-2": 36.5}


def test_parse_overrides_blank():
    assert parse_overrides(None) == {}
    assert parse_overrides("   ") == {}


@pytest.mark.parametrize("payload", ["{bad json", "[1, 2]", '{"ISSUE-1": "six"}', '{"ISSUE-1": true}'])
def test_parse_overrides_rejects_invalid(payload):
    with pytest.raises(OverridePayloadError, match="error parsing manual adjustments JSON"):
        parse_overrides(payload)


def test_override_error_is_value_error():
    with pytest.raises(ValueError):
        parse_overrides("{")
