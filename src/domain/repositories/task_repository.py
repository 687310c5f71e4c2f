"""Task repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task import Task, TaskScope


class ITaskRepository(Protocol):
    """Repository interface for Task entities."""

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID."""
        ...

    async def list_for_scope(self, user_id: UUID, scope: TaskScope) -> list[Task]:
        """Get the tasks visible in a scope, newest first."""
        ...

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        ...

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a task and return success status."""
        ...
