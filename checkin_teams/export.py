"""Reading and writing participant and team files."""

from pathlib import Path
from typing import List, Sequence

import pandas as pd
import yaml

from .models import Participant, Team


PARTICIPANT_COLUMNS = ['id', 'name', 'skill', 'checkin_at', 'preferred_team', 'team_assigned']
TEAM_KEYS = ('id', 'name', 'color')
MEMBER_KEYS = ('id', 'name')


def _cell(value):
    """Convert a pandas cell to a plain Python value, mapping NaN to None."""
    if pd.isna(value):
        return None
    return value


def _check_record(record, required, where: str) -> None:
    if not isinstance(record, dict):
        raise ValueError(f"{where} must be a mapping")

    missing = [key for key in required if record.get(key) is None]
    if missing:
        raise ValueError(f"{where} is missing keys: {missing}")


def load_participants_csv(csv_path: Path) -> List[Participant]:
    """Load participants from a CSV file with at least ``id`` and ``name`` columns.

    Blank skills are kept as missing ratings rather than 0.
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, na_values=[''])

    participants = []
    for record in df.to_dict(orient='records'):
        participants.append(Participant.from_dict({
            column: _cell(record.get(column)) for column in PARTICIPANT_COLUMNS
        }))
    return participants


def save_participants_csv(participants: Sequence[Participant], output_path: Path) -> None:
    """Save participants to CSV, one row per participant in input order."""
    df = pd.DataFrame(
        [participant.to_dict() for participant in participants],
        columns=PARTICIPANT_COLUMNS,
    )
    df.to_csv(output_path, index=False)


def save_teams_yaml(teams: Sequence[Team], output_path: Path) -> None:
    """Save teams to YAML in slot order, members nested under each team."""
    yaml_data = {'teams': [team.to_dict() for team in teams]}

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(yaml_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_teams_yaml(yaml_path: Path) -> List[Team]:
    """Load teams previously written by :func:`save_teams_yaml`.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no ``teams`` list or a team or member
            entry is not a mapping with the required keys
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Teams file not found: {yaml_path}")

    with open(yaml_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or not isinstance(data.get('teams'), list):
        raise ValueError("Teams file must contain a 'teams' list")

    for index, team in enumerate(data['teams']):
        _check_record(team, TEAM_KEYS, f"teams[{index}]")
        members = team.get('members') or []
        if not isinstance(members, list):
            raise ValueError(f"teams[{index}].members must be a list")
        for member_index, member in enumerate(members):
            _check_record(member, MEMBER_KEYS, f"teams[{index}].members[{member_index}]")

    return [Team.from_dict(team) for team in data['teams']]
