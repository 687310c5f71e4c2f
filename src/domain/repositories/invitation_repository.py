"""Invitation repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.invitation import Invitation, InvitationStatus


class IInvitationRepository(Protocol):
    """Repository interface for Invitation entities."""

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation."""
        ...

    async def get_by_id(self, id: UUID) -> Invitation | None:
        """Get an invitation by its primary key."""
        ...

    async def get_pending_for_email(self, email: str) -> list[Invitation]:
        """Get pending invitations for an email, joined with the team name."""
        ...

    async def resolve(self, id: UUID, status: InvitationStatus) -> bool:
        """Set a terminal status, only if the invitation is still pending.

        Returns False when no pending row with that id exists.
        """
        ...
