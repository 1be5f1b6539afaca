"""Check-in Teams - split checked-in event participants into balanced teams."""

__version__ = "0.1.0"

from .assigner import TeamAssigner, assign_teams, rebalance_teams, stamp_team_assignments
from .config import Config
from .models import Participant, Policy, Team

__all__ = [
    "TeamAssigner",
    "assign_teams",
    "rebalance_teams",
    "stamp_team_assignments",
    "Config",
    "Participant",
    "Policy",
    "Team",
]
