"""Command-line interface for Check-in Teams."""

import logging
import random
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from checkin_teams.assigner import TeamAssigner, get_assignment_summary, stamp_team_assignments
from checkin_teams.config import Config
from checkin_teams.export import (
  load_participants_csv,
  load_teams_yaml,
  save_participants_csv,
  save_teams_yaml,
)
from checkin_teams.models import Policy
from checkin_teams.validators import validate_participants, validate_participants_csv


def load_config(config_file: Optional[Path]) -> Config:
  """Load the config file if one was given, otherwise the defaults."""
  config = Config()
  if config_file is not None:
    config.load_from_file(config_file)
  return config

def print_summary(summary: dict) -> None:
  click.secho(f"Participants: {summary['total_people']} ({summary['unrated_people']} without rating)", fg="blue")
  for team in summary['teams'].values():
    average = team['average_skill']
    average_text = f"{average:.2f}" if average is not None else "-"
    click.secho(f"  {team['name']}: {team['size']} members, average skill {average_text}", fg="blue")
  click.secho(f"Skill gap: {summary['skill_gap']:.2f}", fg="blue")

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
  """Check-in Teams CLI for splitting checked-in participants into teams."""
  if verbose:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

@cli.command("init-config")
@click.argument("config_file", type=click.Path(path_type=Path))
def init_config(config_file: Path):
  """Write the default configuration to CONFIG_FILE."""
  if config_file.exists() and not click.confirm(f"{config_file} exists; overwrite?", default=False):
    click.secho(f"Skipping {config_file}", fg="green")
    return

  Config().save_to_file(config_file)
  click.secho(f"Wrote default config to {config_file}", fg="green")

@cli.command()
@click.argument("participants_file", type=click.Path(exists=True, path_type=Path))
def validate(participants_file: Path):
  """Validate a participants CSV file."""
  try:
    validate_participants_csv(participants_file)
    validate_participants(load_participants_csv(participants_file))
  except ValueError as e:
    click.secho(f"❌ {participants_file}: {e}", fg="red")
    sys.exit(1)

  click.secho("✅ All participants are valid!", fg="green")

@cli.command()
@click.argument("participants_file", type=click.Path(exists=True, path_type=Path))
@click.option("-t", "--teams", "team_count", type=int, default=None,
              help="Number of teams (defaults to the config value)")
@click.option("-p", "--policy", type=click.Choice([p.value for p in Policy]), default=None,
              help="Balancing policy (defaults to the config value)")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible assignment")
@click.option("--config", "config_file", type=click.Path(exists=True, path_type=Path), default=None,
              help="YAML config with team names and colors")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Write teams to this YAML file")
@click.option("--stamped", type=click.Path(path_type=Path), default=None,
              help="Write participants labelled with their team to this CSV file")
def assign(participants_file: Path, team_count: Optional[int], policy: Optional[str], seed: Optional[int],
           config_file: Optional[Path], output: Optional[Path], stamped: Optional[Path]):
  """Assign participants from PARTICIPANTS_FILE to teams."""
  try:
    config = load_config(config_file)
    validate_participants_csv(participants_file)
    participants = load_participants_csv(participants_file)
    validate_participants(participants)

    team_count = team_count if team_count is not None else config.team_count
    policy = Policy(policy) if policy is not None else config.policy
    click.secho(f"Assigning {len(participants)} participants to {team_count} teams ({policy.value})", fg="blue")

    rng = random.Random(seed)
    teams = TeamAssigner(config).assign(participants, team_count, policy, rng=rng)
  except (ValueError, yaml.YAMLError) as e:
    click.secho(f"Error: {e}", fg="red")
    sys.exit(1)

  print_summary(get_assignment_summary(teams))

  if output is not None:
    save_teams_yaml(teams, output)
    click.secho(f"Saved teams to {output}", fg="green")

  if stamped is not None:
    save_participants_csv(stamp_team_assignments(participants, teams), stamped)
    click.secho(f"Saved labelled participants to {stamped}", fg="green")

  if output is None and stamped is None:
    for team in teams:
      names = ", ".join(member.name for member in team.members) or "(empty)"
      click.secho(f"{team.name}: {names}", fg="green")

@cli.command()
@click.argument("teams_file", type=click.Path(exists=True, path_type=Path))
def summary(teams_file: Path):
  """Summarize a teams YAML file written by assign."""
  try:
    teams = load_teams_yaml(teams_file)
  except (ValueError, yaml.YAMLError) as e:
    click.secho(f"Error: {e}", fg="red")
    sys.exit(1)

  print_summary(get_assignment_summary(teams))

if __name__ == "__main__":
  cli()
