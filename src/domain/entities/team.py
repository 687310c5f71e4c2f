"""Team and membership domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class TeamRole(StrEnum):
    """Role of a user inside a team. Only these two roles exist."""

    OWNER = "owner"
    MEMBER = "member"


@dataclass
class Team:
    """Domain entity for a Team.

    ``owner_id`` is set once, when the team is created, and never changes.
    """

    name: str
    owner_id: UUID
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class TeamMembership:
    """A row asserting that a user belongs to a team with a role."""

    team_id: UUID
    user_id: UUID
    role: TeamRole = TeamRole.MEMBER
    id: UUID = field(default_factory=uuid4)
    joined_at: datetime = field(default_factory=datetime.utcnow)


def is_owner(team: Team | None, user_id: UUID | None) -> bool:
    """True if and only if ``user_id`` created the team."""
    if team is None or user_id is None:
        return False
    return team.owner_id == user_id
