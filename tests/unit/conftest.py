"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from infrastructure.notifications.sinks import CollectingNotificationSink


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.teams = AsyncMock()
        self.invitations = AsyncMock()
        self.tasks = AsyncMock()
        self.committed = False
        self.rolled_back = False
        self.commits = 0

    async def commit(self) -> None:
        self.committed = True
        self.commits += 1

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def team_id() -> UUID:
    """A random team ID."""
    return uuid4()


@pytest.fixture
def sink() -> CollectingNotificationSink:
    """A sink that records every notice."""
    return CollectingNotificationSink()
