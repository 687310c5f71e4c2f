"""Task domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID, uuid4


class TaskPriority(StrEnum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Task:
    """Domain entity for a Task.

    ``team_id`` is None for personal tasks.
    """

    user_id: UUID
    title: str
    id: UUID = field(default_factory=uuid4)
    team_id: UUID | None = None
    description: str | None = None
    completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str = "General"
    due_date: date | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def toggle(self) -> None:
        """Flip the completion flag."""
        self.completed = not self.completed
        self.updated_at = datetime.utcnow()

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True, slots=True)
class TaskScope:
    """The context tasks are listed and created under.

    A ``team_id`` of None is the caller's personal scope. Repositories turn
    this into ``team_id IS NULL AND user_id = caller`` or ``team_id = <id>``.
    """

    team_id: UUID | None = None

    @classmethod
    def personal(cls) -> "TaskScope":
        return cls(team_id=None)

    @property
    def is_personal(self) -> bool:
        return self.team_id is None

    def matches(self, task: Task, user_id: UUID) -> bool:
        """Evaluate the scope predicate against an in-memory task."""
        if self.team_id is None:
            return task.team_id is None and task.user_id == user_id
        return task.team_id == self.team_id
