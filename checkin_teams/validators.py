"""Validation utilities for Check-in Teams."""

import math
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from .models import Participant, Policy


REQUIRED_COLUMNS = ('id', 'name')


def validate_team_count(team_count: int) -> None:
    """Validate the requested number of teams.

    Raises:
        ValueError: If ``team_count`` is not a positive integer
    """
    if isinstance(team_count, bool) or not isinstance(team_count, int):
        raise ValueError(f"Team count must be an integer, got {team_count!r}")

    if team_count < 1:
        raise ValueError(f"Team count must be at least 1, got {team_count}")


def validate_policy(policy: Union[Policy, str]) -> Policy:
    """Coerce ``policy`` to a :class:`Policy`.

    Raises:
        ValueError: If the policy is unknown
    """
    try:
        return Policy(policy)
    except ValueError:
        allowed = ', '.join(p.value for p in Policy)
        raise ValueError(f"Unknown policy {policy!r}; expected one of: {allowed}")


def validate_participants(participants: Iterable[Participant]) -> None:
    """Validate participant records before assignment.

    Args:
        participants: Participants to validate

    Raises:
        ValueError: If an id or name is empty, an id repeats, or a skill is negative
    """
    seen = set()
    for participant in participants:
        if not participant.id or not str(participant.id).strip():
            raise ValueError("Participant ids cannot be empty or whitespace-only")

        if not participant.name or not participant.name.strip():
            raise ValueError(f"Participant {participant.id} has an empty name")

        if participant.id in seen:
            raise ValueError(f"Duplicate participant id: {participant.id}")
        seen.add(participant.id)

        if participant.skill is not None:
            if math.isnan(participant.skill) or participant.skill < 0:
                raise ValueError(
                    f"Participant {participant.name} has invalid skill {participant.skill}; "
                    f"skill must be a non-negative number"
                )


def validate_participants_csv(csv_path: Path) -> None:
    """Validate a participants CSV file.

    Ensures the CSV file has the structure the assign command expects:
    - Has ``id`` and ``name`` columns
    - No missing or duplicate ids, no missing names
    - The optional ``skill`` column holds non-negative numbers or blanks

    Args:
        csv_path: Path to the CSV file to validate

    Raises:
        FileNotFoundError: If the CSV file doesn't exist
        ValueError: If the CSV structure or content is invalid
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"Participants file not found: {csv_path}")

    try:
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, na_values=[''])
    except pd.errors.EmptyDataError:
        raise ValueError("Participants CSV file is empty")
    except Exception as e:
        raise ValueError(f"Failed to read CSV file: {e}")

    missing_columns = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing_columns:
        raise ValueError(f"Participants CSV is missing columns: {missing_columns}")

    if df['id'].isna().any():
        raise ValueError("Column 'id' contains missing values")

    if df['name'].isna().any():
        raise ValueError("Column 'name' contains missing values")

    duplicates = sorted(set(df.loc[df['id'].duplicated(), 'id']))
    if duplicates:
        raise ValueError(f"Column 'id' contains duplicate ids: {duplicates}")

    if 'skill' in df.columns:
        skills = pd.to_numeric(df['skill'], errors='coerce')
        if (skills.isna() & df['skill'].notna()).any():
            raise ValueError("Column 'skill' contains non-numeric values")

        if (skills.dropna() < 0).any():
            raise ValueError("Column 'skill' contains negative values")
