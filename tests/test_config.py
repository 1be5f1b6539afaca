"""Tests for the config module."""

import tempfile
from pathlib import Path

import pytest
import yaml

from checkin_teams.config import Config, DEFAULT_TEAM_COLORS, DEFAULT_TEAM_NAMES, slot_letter
from checkin_teams.models import Policy


class TestConfig:
    """Test cases for the Config class."""

    def test_default_initialization(self):
        """Test that Config initializes with correct defaults."""
        config = Config()
        assert config.team_count == 4
        assert config.policy is Policy.BALANCED
        assert config.team_names == DEFAULT_TEAM_NAMES
        assert config.team_colors == DEFAULT_TEAM_COLORS

    def test_load_teams_section(self):
        """Test loading team settings from YAML."""
        config_data = {
            'teams': {
                'count': 3,
                'policy': 'mixed',
                'names': ['Owls', ' Bats '],
                'colors': ['#000000'],
                'fallback_color': '#ffffff',
            }
        }

        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            yaml.dump(config_data, f)
            config_path = Path(f.name)

        try:
            config = Config()
            config.load_from_file(config_path)
            assert config.team_count == 3
            assert config.policy is Policy.MIXED
            assert config.team_names == ['Owls', 'Bats']
            assert config.team_colors == ['#000000']
            assert config.fallback_color == '#ffffff'
        finally:
            config_path.unlink()

    @pytest.mark.parametrize("teams,message", [
        ({'count': 0}, "positive integer"),
        ({'count': 'four'}, "positive integer"),
        ({'policy': 'fastest'}, "teams.policy"),
        ({'names': 'Owls'}, "must be a list"),
        ({'colors': ['#000', '']}, "non-empty string"),
        ({'names': ['Owls', 'Bats', 'Owls']}, r"duplicate names: \['Owls'\]"),
        ({'names': ['Owls', 'Team C']}, "clash with fallback names"),
    ])
    def test_invalid_values(self, teams, message):
        """Test invalid team settings are rejected."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            yaml.dump({'teams': teams}, f)
            config_path = Path(f.name)

        try:
            with pytest.raises(ValueError, match=message):
                Config().load_from_file(config_path)
        finally:
            config_path.unlink()

    def test_team_name_fallback(self):
        """Test lettered names once the pool runs out."""
        config = Config()
        config.team_names = ['Owls']

        assert config.team_name(0) == 'Owls'
        assert config.team_name(1) == 'Team B'
        assert config.team_name(2) == 'Team C'

    def test_team_color_fallback(self):
        """Test the neutral color once the palette runs out."""
        config = Config()
        assert config.team_color(0) == DEFAULT_TEAM_COLORS[0]
        assert config.team_color(len(DEFAULT_TEAM_COLORS)) == config.fallback_color

    def test_slot_letter(self):
        assert [slot_letter(s) for s in (0, 1, 25, 26, 27, 51, 52)] == [
            'A', 'B', 'Z', 'AA', 'AB', 'AZ', 'BA'
        ]

    def test_save_and_reload(self):
        """Test a saved config loads back identically."""
        config = Config()
        config.team_count = 2
        config.policy = Policy.RANDOM
        config.team_names = ['Owls', 'Bats']

        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            config_path = Path(f.name)

        try:
            config.save_to_file(config_path)
            loaded = Config()
            loaded.load_from_file(config_path)
            assert loaded.to_dict() == config.to_dict()
        finally:
            config_path.unlink()

    def test_invalid_config_structure(self):
        """Test handling of invalid configuration structures."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("invalid: yaml: structure: [")
            config_path = Path(f.name)

        try:
            config = Config()
            with pytest.raises(yaml.YAMLError):
                config.load_from_file(config_path)
        finally:
            config_path.unlink()

    def test_non_dictionary_config(self):
        """Test a YAML list is rejected."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("- one\n- two\n")
            config_path = Path(f.name)

        try:
            with pytest.raises(ValueError, match="YAML dictionary"):
                Config().load_from_file(config_path)
        finally:
            config_path.unlink()

    def test_nonexistent_config_file(self):
        """Test handling of nonexistent configuration file."""
        config = Config()
        nonexistent_path = Path('/nonexistent/config.yaml')

        with pytest.raises(FileNotFoundError):
            config.load_from_file(nonexistent_path)
