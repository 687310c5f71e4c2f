"""Active task scope (personal or a team) for one signed-in user."""

from uuid import UUID

from core.exceptions import NotTeamOwnerError, TeamNotFoundError
from domain.controllers.base import Controller
from domain.entities.task import TaskScope
from domain.entities.team import Team, is_owner
from domain.ports import Identity, INotificationSink
from domain.services.membership_service import MembershipService


class TeamScopeController(Controller):
    """Holds the candidate teams and which of them, if any, is active.

    ``None`` as the active team means the personal scope.
    """

    def __init__(
        self,
        service: MembershipService,
        user: Identity | None,
        sink: INotificationSink,
    ) -> None:
        super().__init__(user, sink)
        self._service = service
        self._teams: list[Team] = []
        self._active_team_id: UUID | None = None

    @property
    def teams(self) -> list[Team]:
        return list(self._teams)

    @property
    def active_team_id(self) -> UUID | None:
        return self._active_team_id

    @property
    def active_team(self) -> Team | None:
        if self._active_team_id is None:
            return None
        return next((t for t in self._teams if t.id == self._active_team_id), None)

    @property
    def scope(self) -> TaskScope:
        """Filter predicate handed to task queries."""
        return TaskScope(team_id=self._active_team_id)

    @property
    def can_invite(self) -> bool:
        """Only the owner of the active team sees the invite action."""
        return self._user is not None and is_owner(self.active_team, self._user.id)

    async def refresh(self) -> list[Team]:
        """Reload the user's teams, replacing the candidate list.

        Falls back to the personal scope if the active team disappeared.
        """
        with self._reporting("refresh", "Could not load your teams."):
            user = self._require_user()
            self._teams = await self._service.list_teams(user.id)
        if self._active_team_id is not None and self.active_team is None:
            self._active_team_id = None
        return self.teams

    def select(self, team_id: UUID | None) -> TaskScope:
        """Switch scope. ``None`` selects personal tasks."""
        if team_id is not None and not any(t.id == team_id for t in self._teams):
            raise TeamNotFoundError(str(team_id))
        self._active_team_id = team_id
        return self.scope

    async def create_team(self, name: str, description: str | None = None) -> Team:
        """Create a team owned by the current user and switch to it."""
        with self._reporting("create_team", "Could not create the team."):
            user = self._require_user()
            team = await self._service.create_team(user.id, name, description)
        self._teams = [team, *(t for t in self._teams if t.id != team.id)]
        self._active_team_id = team.id
        self._success("Team created", f'Team "{team.name}" was created')
        return team

    def require_owner(self) -> Team:
        """Return the active team, or raise if the user does not own it."""
        team = self.active_team
        if team is None or not self.can_invite:
            raise NotTeamOwnerError(str(self._active_team_id) if self._active_team_id else None)
        return team
