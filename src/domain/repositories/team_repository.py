"""Team repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.team import Team, TeamMembership


class ITeamRepository(Protocol):
    """Repository interface for Team and TeamMembership entities."""

    async def get(self, id: UUID) -> Team | None:
        """Get a team by ID."""
        ...

    async def get_all_for_user(self, user_id: UUID) -> list[Team]:
        """Get the teams a user owns or is a member of, newest first."""
        ...

    async def create(self, team: Team) -> Team:
        """Create a new team."""
        ...

    async def get_member(self, team_id: UUID, user_id: UUID) -> TeamMembership | None:
        """Get the membership row for a (team, user) pair."""
        ...

    async def add_member(self, membership: TeamMembership) -> TeamMembership:
        """Insert a membership row."""
        ...
