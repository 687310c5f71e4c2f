"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.invitation_repository import IInvitationRepository
from domain.repositories.task_repository import ITaskRepository
from domain.repositories.team_repository import ITeamRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions.

    Implementations raise ``BackendError`` when the underlying store fails.
    """

    teams: ITeamRepository
    invitations: IInvitationRepository
    tasks: ITaskRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
