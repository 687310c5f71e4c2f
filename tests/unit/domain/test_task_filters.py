"""Unit tests for task filtering and statistics."""

from uuid import uuid4

import pytest

from domain.entities.task import Task, TaskPriority
from domain.services.task_filters import TaskStatusFilter, filter_tasks, task_stats


@pytest.fixture
def tasks() -> list[Task]:
    user = uuid4()
    return [
        Task(user_id=user, title="Draft logo", category="Design", priority=TaskPriority.HIGH),
        Task(
            user_id=user,
            title="Book venue",
            description="Ask about the LOGO wall",
            completed=True,
        ),
        Task(user_id=user, title="Pay invoice", category="Finance", priority=TaskPriority.HIGH,
             completed=True),
        Task(user_id=user, title="Plan sprint", priority=TaskPriority.LOW),
    ]


class TestFilterTasks:
    def test_all_returns_everything(self, tasks: list[Task]) -> None:
        assert filter_tasks(tasks) == tasks

    def test_completed(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, TaskStatusFilter.COMPLETED)
        assert [t.title for t in result] == ["Book venue", "Pay invoice"]

    def test_pending(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, TaskStatusFilter.PENDING)
        assert [t.title for t in result] == ["Draft logo", "Plan sprint"]

    def test_high_priority_includes_completed(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, TaskStatusFilter.HIGH_PRIORITY)
        assert [t.title for t in result] == ["Draft logo", "Pay invoice"]

    def test_search_is_case_insensitive_across_fields(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, search="logo")
        assert [t.title for t in result] == ["Draft logo", "Book venue"]

    def test_search_matches_category(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, search="finance")
        assert [t.title for t in result] == ["Pay invoice"]

    def test_filter_then_search(self, tasks: list[Task]) -> None:
        result = filter_tasks(tasks, TaskStatusFilter.PENDING, "  LOGO ")
        assert [t.title for t in result] == ["Draft logo"]

    def test_blank_search_is_ignored(self, tasks: list[Task]) -> None:
        assert len(filter_tasks(tasks, search="   ")) == len(tasks)


class TestTaskStats:
    def test_counts(self, tasks: list[Task]) -> None:
        stats = task_stats(tasks)

        assert stats.total == 4
        assert stats.completed == 2
        assert stats.pending == 2
        # Completed high-priority tasks are not counted
        assert stats.high_priority == 1

    def test_empty(self) -> None:
        stats = task_stats([])
        assert (stats.total, stats.completed, stats.pending, stats.high_priority) == (0, 0, 0, 0)
