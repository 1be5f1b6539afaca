"""Data model for Check-in Teams."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


class Policy(str, Enum):
    """Balancing strategy used when splitting participants into teams."""

    BALANCED = "balanced"
    RANDOM = "random"
    MIXED = "mixed"


@dataclass(frozen=True)
class Participant:
    """A checked-in participant.

    ``skill`` is optional; a missing rating counts as 0 for sums and
    averages but is kept as ``None`` so callers can show "no rating".
    """

    id: str
    name: str
    skill: Optional[float] = None
    checkin_at: Optional[str] = None
    preferred_team: Optional[str] = None
    team_assigned: Optional[str] = None

    @property
    def effective_skill(self) -> float:
        return self.skill if self.skill is not None else 0

    @property
    def has_rating(self) -> bool:
        return self.skill is not None

    def with_team(self, team_name: Optional[str]) -> "Participant":
        """Return a copy labelled with ``team_name``."""
        return replace(self, team_assigned=team_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'skill': self.skill,
            'checkin_at': self.checkin_at,
            'preferred_team': self.preferred_team,
            'team_assigned': self.team_assigned,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        skill = data.get('skill')
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            skill=float(skill) if skill is not None else None,
            checkin_at=data.get('checkin_at'),
            preferred_team=data.get('preferred_team'),
            team_assigned=data.get('team_assigned'),
        )


@dataclass
class Team:
    """A team produced by one assignment run.

    ``total_skill`` is kept in step with ``members`` by the mutators below;
    use ``computed_skill`` to re-derive it. With integer skills the two are
    equal exactly; fractional skills can leave them apart by floating-point
    rounding after a series of swaps.
    """

    id: str
    name: str
    color: str
    members: List[Participant] = field(default_factory=list)
    total_skill: float = 0

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def average_skill(self) -> Optional[float]:
        if not self.members:
            return None
        return self.total_skill / len(self.members)

    def computed_skill(self) -> float:
        return sum(member.effective_skill for member in self.members)

    def member_ids(self) -> List[str]:
        return [member.id for member in self.members]

    def add_member(self, participant: Participant) -> None:
        self.members.append(participant)
        self.total_skill += participant.effective_skill

    def remove_member(self, participant_id: str) -> Participant:
        """Remove the member with ``participant_id`` and return it.

        Raises:
            KeyError: If no member has that id
        """
        for index, member in enumerate(self.members):
            if member.id == participant_id:
                del self.members[index]
                self.total_skill -= member.effective_skill
                return member
        raise KeyError(f"{participant_id} is not a member of {self.id}")

    def replace_member(self, index: int, participant: Participant) -> Participant:
        """Put ``participant`` at ``index`` and return the member it replaced."""
        outgoing = self.members[index]
        self.members[index] = participant
        self.total_skill += participant.effective_skill - outgoing.effective_skill
        return outgoing

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'total_skill': self.total_skill,
            'members': [member.to_dict() for member in self.members],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        members = [Participant.from_dict(m) for m in data.get('members') or []]
        team = cls(id=str(data['id']), name=str(data['name']), color=str(data['color']))
        for member in members:
            team.add_member(member)
        return team
