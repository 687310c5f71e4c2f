"""Unit tests for TaskService."""

from datetime import date
from typing import Any
from uuid import UUID, uuid4

import pytest

from core.exceptions import NotATeamMemberError, TaskNotFoundError, ValidationError
from domain.entities.task import Task, TaskPriority, TaskScope
from domain.entities.team import Team, TeamMembership
from domain.services.task_service import TaskService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> TaskService:
    return TaskService(lambda: uow, default_category="Inbox")


async def _echo(value: Any) -> Any:
    return value


class TestListForScope:
    @pytest.mark.asyncio
    async def test_personal_scope_needs_no_membership(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.tasks.list_for_scope.return_value = []

        await service.list_for_scope(user_id, TaskScope.personal())

        uow.teams.get_member.assert_not_awaited()
        uow.tasks.list_for_scope.assert_awaited_once_with(user_id, TaskScope.personal())

    @pytest.mark.asyncio
    async def test_team_scope_requires_membership(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, team_id: UUID
    ) -> None:
        uow.teams.get_member.return_value = None
        uow.teams.get.return_value = Team(id=team_id, name="Design Guild", owner_id=uuid4())

        with pytest.raises(NotATeamMemberError):
            await service.list_for_scope(user_id, TaskScope(team_id=team_id))

        uow.tasks.list_for_scope.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_without_member_row_keeps_access(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, team_id: UUID
    ) -> None:
        uow.teams.get_member.return_value = None
        uow.teams.get.return_value = Team(id=team_id, name="Design Guild", owner_id=user_id)
        uow.tasks.list_for_scope.return_value = []

        assert await service.list_for_scope(user_id, TaskScope(team_id=team_id)) == []


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_in_team_scope(
        self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID, team_id: UUID
    ) -> None:
        uow.teams.get_member.return_value = TeamMembership(team_id=team_id, user_id=user_id)
        uow.tasks.create.side_effect = _echo

        task = await service.create(
            user_id,
            TaskScope(team_id=team_id),
            " Draft logo ",
            priority=TaskPriority.HIGH,
            due_date=date(2026, 3, 1),
        )

        assert task.title == "Draft logo"
        assert task.team_id == team_id
        assert task.user_id == user_id
        assert task.priority == TaskPriority.HIGH
        assert task.category == "Inbox"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_blank_title(self, service: TaskService, user_id: UUID) -> None:
        with pytest.raises(ValidationError):
            await service.create(user_id, TaskScope.personal(), "  ")


class TestUpdateToggleDelete:
    @pytest.fixture
    def task(self, user_id: UUID) -> Task:
        return Task(user_id=user_id, title="Old", due_date=date(2026, 1, 1))

    @pytest.mark.asyncio
    async def test_update_fields(
        self, service: TaskService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ) -> None:
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = _echo

        updated = await service.update(task.id, user_id, title="New", category="  ")

        assert updated.title == "New"
        assert updated.category == "Inbox"
        # due_date untouched unless passed
        assert updated.due_date == date(2026, 1, 1)

    @pytest.mark.asyncio
    async def test_update_can_clear_due_date(
        self, service: TaskService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ) -> None:
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = _echo

        updated = await service.update(task.id, user_id, due_date=None)

        assert updated.due_date is None

    @pytest.mark.asyncio
    async def test_toggle(
        self, service: TaskService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ) -> None:
        uow.tasks.get.return_value = task
        uow.tasks.update.side_effect = _echo

        assert (await service.toggle(task.id, user_id)).completed

    @pytest.mark.asyncio
    async def test_other_users_personal_task_is_not_found(
        self, service: TaskService, uow: FakeUnitOfWork, task: Task
    ) -> None:
        uow.tasks.get.return_value = task

        with pytest.raises(TaskNotFoundError):
            await service.delete(task.id, uuid4())

        uow.tasks.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_task(self, service: TaskService, uow: FakeUnitOfWork, user_id: UUID) -> None:
        uow.tasks.get.return_value = None

        with pytest.raises(TaskNotFoundError):
            await service.toggle(uuid4(), user_id)

    @pytest.mark.asyncio
    async def test_delete(
        self, service: TaskService, uow: FakeUnitOfWork, task: Task, user_id: UUID
    ) -> None:
        uow.tasks.get.return_value = task
        uow.tasks.delete.return_value = True

        assert await service.delete(task.id, user_id)
        assert uow.committed
