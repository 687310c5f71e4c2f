"""SQLAlchemy implementation of Invitation repository."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.invitation import Invitation, InvitationStatus
from infrastructure.database.models import TeamInvitationModel, TeamModel


class SQLAlchemyInvitationRepository:
    """SQLAlchemy implementation of IInvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation."""
        model = TeamInvitationModel(
            id=invitation.id,
            team_id=invitation.team_id,
            email=invitation.email,
            invited_by=invitation.invited_by,
            status=invitation.status.value,
            created_at=invitation.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_by_id(self, id: UUID) -> Invitation | None:
        """Get an invitation by its primary key."""
        stmt = select(TeamInvitationModel).where(TeamInvitationModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_pending_for_email(self, email: str) -> list[Invitation]:
        """Get pending invitations for an email, joined with the team name.

        Invitations whose team row is gone are not returned.
        """
        stmt = (
            select(TeamInvitationModel, TeamModel.name)
            .join(TeamModel, TeamModel.id == TeamInvitationModel.team_id)
            .where(
                TeamInvitationModel.email == email,
                TeamInvitationModel.status == InvitationStatus.PENDING.value,
            )
            .order_by(TeamInvitationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model, team_name) for model, team_name in result.all()]

    async def resolve(self, id: UUID, status: InvitationStatus) -> bool:
        """Set a terminal status if, and only if, the row is still pending."""
        stmt = (
            update(TeamInvitationModel)
            .where(
                TeamInvitationModel.id == id,
                TeamInvitationModel.status == InvitationStatus.PENDING.value,
            )
            .values(status=status.value)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    def _to_entity(self, model: TeamInvitationModel, team_name: str | None = None) -> Invitation:
        """Convert ORM model to domain entity."""
        return Invitation(
            id=model.id,
            team_id=model.team_id,
            email=model.email,
            invited_by=model.invited_by,
            status=InvitationStatus(model.status),
            created_at=model.created_at,
            team_name=team_name,
        )
