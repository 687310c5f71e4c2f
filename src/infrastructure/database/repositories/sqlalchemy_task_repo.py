"""SQLAlchemy implementation of Task repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import Task, TaskPriority, TaskScope
from infrastructure.database.models import TaskModel


class SQLAlchemyTaskRepository:
    """SQLAlchemy implementation of ITaskRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_scope(self, user_id: UUID, scope: TaskScope) -> list[Task]:
        """Get the tasks visible in a scope, newest first."""
        stmt = select(TaskModel)
        if scope.is_personal:
            stmt = stmt.where(TaskModel.team_id.is_(None), TaskModel.user_id == user_id)
        else:
            stmt = stmt.where(TaskModel.team_id == scope.team_id)
        stmt = stmt.order_by(TaskModel.created_at.desc())

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        model = self._to_model(task)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        stmt = select(TaskModel).where(TaskModel.id == task.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one()

        model.title = task.title
        model.description = task.description
        model.completed = task.completed
        model.priority = task.priority.value
        model.category = task.category
        model.due_date = task.due_date
        model.updated_at = task.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a task."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: TaskModel) -> Task:
        """Convert ORM model to domain entity."""
        return Task(
            id=model.id,
            user_id=model.user_id,
            team_id=model.team_id,
            title=model.title,
            description=model.description,
            completed=model.completed,
            priority=TaskPriority(model.priority),
            category=model.category,
            due_date=model.due_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Task) -> TaskModel:
        """Convert domain entity to ORM model."""
        return TaskModel(
            id=entity.id,
            user_id=entity.user_id,
            team_id=entity.team_id,
            title=entity.title,
            description=entity.description,
            completed=entity.completed,
            priority=entity.priority.value,
            category=entity.category,
            due_date=entity.due_date,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
