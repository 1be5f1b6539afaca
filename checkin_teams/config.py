"""Configuration management for Check-in Teams."""

import re
from pathlib import Path
from typing import List

import yaml

from .models import Policy


DEFAULT_TEAM_NAMES = [
    "Red Dragons",
    "Blue Whales",
    "Green Foxes",
    "Golden Eagles",
    "Purple Owls",
    "Orange Tigers",
    "Silver Wolves",
    "Pink Flamingos",
]

DEFAULT_TEAM_COLORS = [
    "#ef4444",
    "#3b82f6",
    "#22c55e",
    "#eab308",
    "#a855f7",
    "#f97316",
    "#94a3b8",
    "#ec4899",
]

DEFAULT_FALLBACK_COLOR = "#6b7280"

FALLBACK_NAME_RE = re.compile(r"Team [A-Z]+")


def slot_letter(slot: int) -> str:
    """Spreadsheet-style letter for a slot: 0 -> A, 25 -> Z, 26 -> AA."""
    letters = ""
    slot += 1
    while slot > 0:
        slot, rem = divmod(slot - 1, 26)
        letters = chr(ord('A') + rem) + letters
    return letters


class Config:
    """Configuration class for team assignment settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.team_count: int = 4
        self.policy: Policy = Policy.BALANCED
        self.team_names: List[str] = list(DEFAULT_TEAM_NAMES)
        self.team_colors: List[str] = list(DEFAULT_TEAM_COLORS)
        self.fallback_color: str = DEFAULT_FALLBACK_COLOR

    def load_from_file(self, config_path: Path) -> None:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML file is invalid
            ValueError: If the configuration structure is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a YAML dictionary")

        team_config = config_data.get('teams', {})
        if not isinstance(team_config, dict):
            raise ValueError("teams must be a dictionary")

        if 'count' in team_config:
            count = team_config['count']
            if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                raise ValueError("teams.count must be a positive integer")
            self.team_count = count

        if 'policy' in team_config:
            try:
                self.policy = Policy(team_config['policy'])
            except ValueError:
                allowed = ', '.join(p.value for p in Policy)
                raise ValueError(f"teams.policy must be one of: {allowed}")

        if 'names' in team_config:
            self.team_names = self._load_string_list(team_config['names'], 'teams.names')
            self._validate_team_names(self.team_names)

        if 'colors' in team_config:
            self.team_colors = self._load_string_list(team_config['colors'], 'teams.colors')

        if 'fallback_color' in team_config:
            fallback = team_config['fallback_color']
            if not isinstance(fallback, str) or not fallback.strip():
                raise ValueError("teams.fallback_color must be a non-empty string")
            self.fallback_color = fallback.strip()

    @staticmethod
    def _load_string_list(values, key: str) -> List[str]:
        if not isinstance(values, list):
            raise ValueError(f"{key} must be a list")

        loaded = []
        for value in values:
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Each entry in {key} must be a non-empty string")
            loaded.append(value.strip())
        return loaded

    @staticmethod
    def _validate_team_names(names: List[str]) -> None:
        """Reject names that would make two teams share a label."""
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"teams.names contains duplicate names: {duplicates}")

        reserved = [name for name in names if FALLBACK_NAME_RE.fullmatch(name)]
        if reserved:
            raise ValueError(
                f"teams.names entries {reserved} clash with fallback names like 'Team C'"
            )

    def team_name(self, slot: int) -> str:
        """Get the display name for the team in ``slot``.

        Falls back to ``Team <letter>`` once the name pool is exhausted.
        """
        if slot < len(self.team_names):
            return self.team_names[slot]
        return f"Team {slot_letter(slot)}"

    def team_color(self, slot: int) -> str:
        """Get the color for the team in ``slot``, or the fallback color."""
        if slot < len(self.team_colors):
            return self.team_colors[slot]
        return self.fallback_color

    def to_dict(self) -> dict:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary representation of the configuration
        """
        return {
            'teams': {
                'count': self.team_count,
                'policy': self.policy.value,
                'names': list(self.team_names),
                'colors': list(self.team_colors),
                'fallback_color': self.fallback_color,
            }
        }

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path where to save the configuration
        """
        config_dict = self.to_dict()

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
