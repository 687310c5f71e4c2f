"""Unit tests for MembershipService."""

from typing import Any
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest

from core.exceptions import BackendError, TeamNotFoundError, ValidationError
from domain.entities.team import Team, TeamMembership, TeamRole
from domain.services.membership_service import MembershipService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> MembershipService:
    return MembershipService(lambda: uow)


async def _echo(value: Any) -> Any:
    return value


class TestCreateTeam:
    @pytest.mark.asyncio
    async def test_creates_team_and_owner_membership(
        self, service: MembershipService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.teams.create.side_effect = _echo
        uow.teams.add_member.side_effect = _echo

        team = await service.create_team(user_id, "  Design Guild ", "Brand work")

        assert team.name == "Design Guild"
        assert team.owner_id == user_id
        assert team.description == "Brand work"

        membership: TeamMembership = uow.teams.add_member.await_args.args[0]
        assert membership.team_id == team.id
        assert membership.user_id == user_id
        assert membership.role == TeamRole.OWNER
        assert uow.commits == 2

    @pytest.mark.asyncio
    async def test_owner_membership_failure_is_not_fatal(
        self, service: MembershipService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.teams.create.side_effect = _echo
        uow.teams.add_member.side_effect = BackendError()

        team = await service.create_team(user_id, "Design Guild")

        assert team.name == "Design Guild"
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_team_insert_failure_propagates(
        self, service: MembershipService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.teams.create.side_effect = BackendError()

        with pytest.raises(BackendError):
            await service.create_team(user_id, "Design Guild")

        uow.teams.add_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_name_is_rejected(self, user_id: UUID) -> None:
        factory = MagicMock()
        service = MembershipService(factory)

        with pytest.raises(ValidationError):
            await service.create_team(user_id, "   ")

        factory.assert_not_called()


class TestQueries:
    @pytest.mark.asyncio
    async def test_has_membership(
        self, service: MembershipService, uow: FakeUnitOfWork, team_id: UUID, user_id: UUID
    ) -> None:
        uow.teams.get_member.return_value = TeamMembership(team_id=team_id, user_id=user_id)
        assert await service.has_membership(team_id, user_id)

        uow.teams.get_member.return_value = None
        assert not await service.has_membership(team_id, user_id)

    @pytest.mark.asyncio
    async def test_get_team(
        self, service: MembershipService, uow: FakeUnitOfWork, team_id: UUID
    ) -> None:
        team = Team(id=team_id, name="Design Guild", owner_id=uuid4())
        uow.teams.get.return_value = team

        assert await service.get_team(team_id) is team

    @pytest.mark.asyncio
    async def test_get_missing_team(
        self, service: MembershipService, uow: FakeUnitOfWork, team_id: UUID
    ) -> None:
        uow.teams.get.return_value = None

        with pytest.raises(TeamNotFoundError):
            await service.get_team(team_id)

    @pytest.mark.asyncio
    async def test_list_teams(
        self, service: MembershipService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        teams = [Team(name="B", owner_id=user_id), Team(name="A", owner_id=uuid4())]
        uow.teams.get_all_for_user.return_value = teams

        assert await service.list_teams(user_id) == teams
        uow.teams.get_all_for_user.assert_awaited_once_with(user_id)
