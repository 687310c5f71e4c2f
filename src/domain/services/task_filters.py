"""In-memory filtering and statistics over a loaded task list."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from domain.entities.task import Task, TaskPriority


class TaskStatusFilter(StrEnum):
    """Status filters offered by the task list."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    HIGH_PRIORITY = "high-priority"


@dataclass(frozen=True, slots=True)
class TaskStats:
    """Counters shown above the task list."""

    total: int
    completed: int
    pending: int
    high_priority: int


def filter_tasks(
    tasks: Iterable[Task],
    status_filter: TaskStatusFilter = TaskStatusFilter.ALL,
    search: str | None = None,
) -> list[Task]:
    """Apply the status filter, then a case-insensitive search.

    The search term matches against title, description and category.
    """
    result = list(tasks)

    if status_filter == TaskStatusFilter.COMPLETED:
        result = [t for t in result if t.completed]
    elif status_filter == TaskStatusFilter.PENDING:
        result = [t for t in result if not t.completed]
    elif status_filter == TaskStatusFilter.HIGH_PRIORITY:
        result = [t for t in result if t.priority == TaskPriority.HIGH]

    term = (search or "").strip().lower()
    if term:
        result = [
            t
            for t in result
            if term in t.title.lower()
            or (t.description and term in t.description.lower())
            or term in t.category.lower()
        ]

    return result


def task_stats(tasks: Iterable[Task]) -> TaskStats:
    """Totals over the unfiltered list.

    ``high_priority`` counts only high-priority tasks that are still open.
    """
    items = list(tasks)
    completed = sum(1 for t in items if t.completed)
    return TaskStats(
        total=len(items),
        completed=completed,
        pending=len(items) - completed,
        high_priority=sum(
            1 for t in items if t.priority == TaskPriority.HIGH and not t.completed
        ),
    )
