"""Core team assignment logic for Check-in Teams."""

import logging
import math
import random
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Union

from .config import Config
from .models import Participant, Policy, Team
from .validators import validate_policy, validate_team_count

logger = logging.getLogger(__name__)

# Teams whose average skills differ by less than this are considered balanced.
BALANCE_TOLERANCE = 2
MAX_REFINEMENT_ITERATIONS = 50
SKILL_BAND_WIDTH = 3


class TeamAssigner:
    """Main class for splitting checked-in participants into teams."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize the team assigner.

        Args:
            config: Configuration object providing the team name and color pools
        """
        self.config = config if config is not None else Config()

    def assign(
        self,
        participants: Sequence[Participant],
        team_count: int,
        policy: Union[Policy, str] = Policy.BALANCED,
        rng: Optional[random.Random] = None,
    ) -> List[Team]:
        """Assign participants to ``team_count`` freshly created teams.

        Every participant lands in exactly one team. Neither ``participants``
        nor its elements are modified.

        Args:
            participants: Snapshot of the checked-in participants
            team_count: Number of teams to create
            policy: One of ``balanced``, ``random`` or ``mixed``
            rng: Random source; pass a seeded ``random.Random`` for reproducible runs

        Returns:
            Teams in slot order

        Raises:
            ValueError: If ``team_count`` is below 1 or the policy is unknown
        """
        validate_team_count(team_count)
        policy = validate_policy(policy)
        rng = rng if rng is not None else random.Random()

        teams = self._create_teams(team_count)
        self._allocate_by_headcount(teams, participants, rng)

        if policy is Policy.BALANCED:
            rebalance_teams(teams)
        elif policy is Policy.MIXED:
            self._redistribute_by_skill_band(teams, participants, rng)

        return teams

    def _create_teams(self, team_count: int) -> List[Team]:
        return [
            Team(
                id=f"team_{slot + 1}",
                name=self.config.team_name(slot),
                color=self.config.team_color(slot),
            )
            for slot in range(team_count)
        ]

    def _allocate_by_headcount(
        self,
        teams: List[Team],
        participants: Sequence[Participant],
        rng: random.Random,
    ) -> None:
        """Fill teams from a shuffled copy so sizes differ by at most one.

        The first ``len(participants) % len(teams)`` slots get the extra member.
        """
        shuffled = list(participants)
        rng.shuffle(shuffled)

        base, remainder = divmod(len(shuffled), len(teams))
        position = 0
        for slot, team in enumerate(teams):
            size = base + 1 if slot < remainder else base
            for participant in shuffled[position:position + size]:
                team.add_member(participant)
            position += size

        logger.debug("Base allocation sizes: %s", [team.size for team in teams])

    def _redistribute_by_skill_band(
        self,
        teams: List[Team],
        participants: Sequence[Participant],
        rng: random.Random,
    ) -> None:
        """Move participants so each skill band is spread round-robin across teams.

        Round-robin restarts at slot 0 for every band, so team sizes may end up
        further apart than after the base allocation.
        """
        current_team = {member.id: team for team in teams for member in team.members}

        bands: Dict[float, List[Participant]] = defaultdict(list)
        for participant in participants:
            bands[skill_band(participant)].append(participant)

        for band in sorted(bands):
            members = bands[band]
            rng.shuffle(members)
            for index, participant in enumerate(members):
                target = teams[index % len(teams)]
                current_team[participant.id].remove_member(participant.id)
                target.add_member(participant)
                current_team[participant.id] = target

        logger.debug(
            "Skill band redistribution over %d bands, sizes: %s",
            len(bands), [team.size for team in teams],
        )


def skill_band(participant: Participant) -> float:
    """Lower bound of the width-3 skill band the participant falls into."""
    return math.floor(participant.effective_skill / SKILL_BAND_WIDTH) * SKILL_BAND_WIDTH


def rebalance_teams(
    teams: List[Team],
    max_iterations: int = MAX_REFINEMENT_ITERATIONS,
) -> int:
    """Swap members between teams to even out average skill.

    Each iteration takes the teams with the highest and lowest average
    (empty teams are ignored, first occurrence wins ties) and performs the
    single swap that shrinks their gap the most. Stops once the gap is below
    ``BALANCE_TOLERANCE``, when no swap helps, or after ``max_iterations``.
    Team sizes never change.

    Args:
        teams: Teams to refine in place
        max_iterations: Upper bound on the number of iterations

    Returns:
        Number of swaps performed
    """
    swaps = 0
    for iteration in range(max_iterations):
        high, low = _extreme_teams(teams)
        if high is None or low is None or high is low:
            break

        gap = high.average_skill - low.average_skill
        if gap < BALANCE_TOLERANCE:
            logger.debug("Converged after %d iterations (gap %.2f)", iteration, gap)
            break

        best = _best_swap(high, low, gap)
        if best is None:
            logger.debug("No improving swap left (gap %.2f)", gap)
            break

        high_index, low_index = best
        incoming = low.members[low_index]
        outgoing = high.replace_member(high_index, incoming)
        low.replace_member(low_index, outgoing)
        swaps += 1
        logger.debug(
            "Swapped %s (%s) with %s (%s)",
            outgoing.name, high.name, incoming.name, low.name,
        )

    return swaps


def _extreme_teams(teams: List[Team]):
    """Teams with the highest and lowest average skill among non-empty teams."""
    high = low = None
    for team in teams:
        average = team.average_skill
        if average is None:
            continue
        if high is None or average > high.average_skill:
            high = team
        if low is None or average < low.average_skill:
            low = team
    return high, low


def _best_swap(high: Team, low: Team, gap: float):
    """Index pair (high member, low member) of the most improving swap, if any."""
    best = None
    best_improvement = 0
    high_size = len(high.members)
    low_size = len(low.members)

    for high_index, high_member in enumerate(high.members):
        for low_index, low_member in enumerate(low.members):
            delta = high_member.effective_skill - low_member.effective_skill
            if delta <= 0:
                continue

            new_high_avg = (high.total_skill - delta) / high_size
            new_low_avg = (low.total_skill + delta) / low_size
            improvement = gap - abs(new_high_avg - new_low_avg)
            if improvement > best_improvement:
                best_improvement = improvement
                best = (high_index, low_index)

    return best


def assign_teams(
    participants: Sequence[Participant],
    team_count: int,
    policy: Union[Policy, str] = Policy.BALANCED,
    rng: Optional[random.Random] = None,
    config: Optional[Config] = None,
) -> List[Team]:
    """Split ``participants`` into ``team_count`` teams using ``policy``.

    Shorthand for ``TeamAssigner(config).assign(...)``.
    """
    return TeamAssigner(config).assign(participants, team_count, policy, rng=rng)


def stamp_team_assignments(
    participants: Sequence[Participant],
    teams: Sequence[Team],
) -> List[Participant]:
    """Label each participant with the name of the team holding its id.

    Participants not found in any team are returned as they are.
    """
    team_by_member = {member.id: team.name for team in teams for member in team.members}
    return [
        participant.with_team(team_by_member[participant.id])
        if participant.id in team_by_member else participant
        for participant in participants
    ]


def get_assignment_summary(teams: Sequence[Team]) -> Dict[str, Any]:
    """Get a summary of the assignment results.

    Args:
        teams: Teams returned by an assignment run

    Returns:
        Dictionary with assignment statistics; per-team entries are keyed by
        team id, since display names are not guaranteed to be unique
    """
    averages = [
        round(team.average_skill, 2) for team in teams if team.average_skill is not None
    ]
    total_people = sum(team.size for team in teams)

    return {
        'total_people': total_people,
        'unrated_people': sum(
            1 for team in teams for member in team.members if not member.has_rating
        ),
        'teams': {
            team.id: {
                'name': team.name,
                'size': team.size,
                'average_skill': (
                    round(team.average_skill, 2) if team.average_skill is not None else None
                ),
                'members': team.member_ids(),
            }
            for team in teams
        },
        'skill_gap': round(max(averages) - min(averages), 2) if averages else 0.0,
        'average_team_size': round(total_people / len(teams), 2) if teams else 0.0,
    }
