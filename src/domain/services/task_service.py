"""Task service layer with business logic."""

from collections.abc import Callable
from datetime import date, datetime
from typing import cast
from uuid import UUID

from core.exceptions import NotATeamMemberError, TaskNotFoundError, ValidationError
from domain.entities.task import Task, TaskPriority, TaskScope
from domain.repositories.unit_of_work import IUnitOfWork


class TaskService:
    """Service layer for Task business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        default_category: str = "General",
    ) -> None:
        self._uow_factory = uow_factory
        self._default_category = default_category

    async def list_for_scope(self, user_id: UUID, scope: TaskScope) -> list[Task]:
        """Get all tasks in a scope. Team scopes require membership."""
        async with self._uow_factory() as uow:
            await self._require_scope_access(uow, scope, user_id)
            return await uow.tasks.list_for_scope(user_id, scope)  # type: ignore[no-any-return]

    async def create(
        self,
        user_id: UUID,
        scope: TaskScope,
        title: str,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        category: str | None = None,
        due_date: date | None = None,
    ) -> Task:
        """Create a task in the given scope."""
        title = (title or "").strip()
        if not title:
            raise ValidationError("title", "Task title is required")

        async with self._uow_factory() as uow:
            await self._require_scope_access(uow, scope, user_id)

            task = Task(
                user_id=user_id,
                team_id=scope.team_id,
                title=title,
                description=description or None,
                priority=priority,
                category=(category or "").strip() or self._default_category,
                due_date=due_date,
            )
            created = await uow.tasks.create(task)
            await uow.commit()
            return created

    async def update(
        self,
        task_id: UUID,
        user_id: UUID,
        title: str | None = None,
        description: str | None = None,
        priority: TaskPriority | None = None,
        category: str | None = None,
        due_date: object = ...,  # Sentinel to detect explicit None
        completed: bool | None = None,
    ) -> Task:
        """Update an existing task's editable fields."""
        if title is not None and not title.strip():
            raise ValidationError("title", "Task title is required")

        async with self._uow_factory() as uow:
            task = await self._get_visible(uow, task_id, user_id)

            if title is not None:
                task.title = title.strip()
            if description is not None:
                task.description = description or None
            if priority is not None:
                task.priority = priority
            if category is not None:
                task.category = category.strip() or self._default_category
            if due_date is not ...:
                task.due_date = cast(date | None, due_date)
            if completed is not None:
                task.completed = completed

            task.updated_at = datetime.utcnow()
            updated = await uow.tasks.update(task)
            await uow.commit()
            return updated

    async def toggle(self, task_id: UUID, user_id: UUID) -> Task:
        """Flip a task's completion flag."""
        async with self._uow_factory() as uow:
            task = await self._get_visible(uow, task_id, user_id)
            task.toggle()
            updated = await uow.tasks.update(task)
            await uow.commit()
            return updated

    async def delete(self, task_id: UUID, user_id: UUID) -> bool:
        """Delete a task."""
        async with self._uow_factory() as uow:
            await self._get_visible(uow, task_id, user_id)
            deleted = await uow.tasks.delete(task_id)
            await uow.commit()
            return deleted  # type: ignore[no-any-return]

    # --- Internal helpers ---

    async def _get_visible(self, uow: IUnitOfWork, task_id: UUID, user_id: UUID) -> Task:
        """Load a task the user may see; hidden and missing tasks look the same."""
        task = await uow.tasks.get(task_id)
        if not task:
            raise TaskNotFoundError(str(task_id))

        if task.team_id is None:
            if task.user_id != user_id:
                raise TaskNotFoundError(str(task_id))
        elif not await self._can_access_team(uow, task.team_id, user_id):
            raise TaskNotFoundError(str(task_id))

        return task

    async def _require_scope_access(
        self, uow: IUnitOfWork, scope: TaskScope, user_id: UUID
    ) -> None:
        if scope.team_id is not None and not await self._can_access_team(
            uow, scope.team_id, user_id
        ):
            raise NotATeamMemberError(str(scope.team_id))

    @staticmethod
    async def _can_access_team(uow: IUnitOfWork, team_id: UUID, user_id: UUID) -> bool:
        # Owners keep access even if their best-effort owner row is missing
        if await uow.teams.get_member(team_id, user_id):
            return True
        team = await uow.teams.get(team_id)
        return team is not None and team.owner_id == user_id
