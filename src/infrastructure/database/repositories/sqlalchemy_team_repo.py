"""SQLAlchemy implementation of Team repository."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.team import Team, TeamMembership, TeamRole
from infrastructure.database.models import TeamMemberModel, TeamModel


class SQLAlchemyTeamRepository:
    """SQLAlchemy implementation of ITeamRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Team | None:
        """Get a team by ID."""
        stmt = select(TeamModel).where(TeamModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_user(self, user_id: UUID) -> list[Team]:
        """Get teams the user owns or is a member of, newest first."""
        member_team_ids = select(TeamMemberModel.team_id).where(
            TeamMemberModel.user_id == user_id
        )
        stmt = (
            select(TeamModel)
            .where(or_(TeamModel.owner_id == user_id, TeamModel.id.in_(member_team_ids)))
            .order_by(TeamModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, team: Team) -> Team:
        """Create a new team."""
        model = TeamModel(
            id=team.id,
            name=team.name,
            description=team.description,
            owner_id=team.owner_id,
            created_at=team.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_member(self, team_id: UUID, user_id: UUID) -> TeamMembership | None:
        """Get the membership row for a (team, user) pair."""
        stmt = select(TeamMemberModel).where(
            TeamMemberModel.team_id == team_id,
            TeamMemberModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._member_to_entity(model) if model else None

    async def add_member(self, membership: TeamMembership) -> TeamMembership:
        """Insert a membership row. Duplicates fail on the unique constraint."""
        model = TeamMemberModel(
            id=membership.id,
            team_id=membership.team_id,
            user_id=membership.user_id,
            role=membership.role.value,
            joined_at=membership.joined_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._member_to_entity(model)

    def _to_entity(self, model: TeamModel) -> Team:
        """Convert ORM model to domain entity."""
        return Team(
            id=model.id,
            name=model.name,
            description=model.description,
            owner_id=model.owner_id,
            created_at=model.created_at,
        )

    def _member_to_entity(self, model: TeamMemberModel) -> TeamMembership:
        """Convert membership ORM model to domain entity."""
        return TeamMembership(
            id=model.id,
            team_id=model.team_id,
            user_id=model.user_id,
            role=TeamRole(model.role),
            joined_at=model.joined_at,
        )
