"""Team and membership service layer."""

import logging
from collections.abc import Callable
from uuid import UUID

from core.exceptions import BackendError, TeamNotFoundError, ValidationError
from domain.entities.team import Team, TeamMembership, TeamRole
from domain.repositories.unit_of_work import IUnitOfWork

logger = logging.getLogger(__name__)


class MembershipService:
    """Creates teams and answers membership questions against the store."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def has_membership(self, team_id: UUID, user_id: UUID) -> bool:
        """Whether a membership row exists for the (team, user) pair."""
        async with self._uow_factory() as uow:
            return await uow.teams.get_member(team_id, user_id) is not None

    async def get_team(self, team_id: UUID) -> Team:
        """Get a team by ID.

        Raises:
            TeamNotFoundError: If the team does not exist.
        """
        async with self._uow_factory() as uow:
            team = await uow.teams.get(team_id)
            if not team:
                raise TeamNotFoundError(str(team_id))
            return team

    async def list_teams(self, user_id: UUID) -> list[Team]:
        """Teams the user owns or belongs to, newest first."""
        async with self._uow_factory() as uow:
            return await uow.teams.get_all_for_user(user_id)  # type: ignore[no-any-return]

    async def create_team(
        self,
        owner_id: UUID,
        name: str,
        description: str | None = None,
    ) -> Team:
        """Create a team and give its creator an owner membership.

        The owner membership is best-effort: if inserting it fails the error
        is logged and the created team is still returned.

        Raises:
            ValidationError: If the name is blank.
            BackendError: If the team itself cannot be stored.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("name", "Team name is required")

        team = Team(
            name=name,
            owner_id=owner_id,
            description=(description or "").strip() or None,
        )

        async with self._uow_factory() as uow:
            created = await uow.teams.create(team)
            await uow.commit()

        try:
            async with self._uow_factory() as uow:
                await uow.teams.add_member(
                    TeamMembership(
                        team_id=created.id,
                        user_id=owner_id,
                        role=TeamRole.OWNER,
                    )
                )
                await uow.commit()
        except BackendError:
            logger.exception(
                "Owner membership insert failed for team %s (owner %s)",
                created.id,
                owner_id,
            )

        logger.info("Created team %s for user %s", created.id, owner_id)
        return created
