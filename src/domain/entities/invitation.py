"""Invitation domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from core.exceptions import InvitationAlreadyResolvedError


class InvitationStatus(StrEnum):
    """Status of a team invitation.

    pending --accept--> accepted, pending --decline--> declined.
    Both outcomes are terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING


def normalize_email(email: str) -> str:
    """Canonical form used both when storing and when matching invitee emails."""
    return email.strip().lower()


@dataclass
class Invitation:
    """Domain entity for a team invitation.

    Addressed to an email rather than a user id: the invitee may not have an
    account yet. ``team_name`` is only populated on reads joined with teams.
    """

    team_id: UUID
    email: str
    invited_by: str
    id: UUID = field(default_factory=uuid4)
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)
    team_name: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING

    def accept(self) -> None:
        """Move pending -> accepted."""
        self._transition(InvitationStatus.ACCEPTED)

    def decline(self) -> None:
        """Move pending -> declined."""
        self._transition(InvitationStatus.DECLINED)

    def _transition(self, target: InvitationStatus) -> None:
        if self.status.is_terminal:
            raise InvitationAlreadyResolvedError(str(self.id), self.status.value)
        self.status = target
