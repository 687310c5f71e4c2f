"""Ports to collaborators the domain depends on but does not implement."""

from typing import Protocol
from uuid import UUID

from domain.entities.notice import NoticeKind


class Identity(Protocol):
    """The authenticated user as seen by the domain.

    ``infrastructure.auth.provider.TokenUser`` satisfies this structurally.
    """

    id: UUID
    email: str


class INotificationSink(Protocol):
    """Accepts user-facing success/error messages. Fire-and-forget."""

    def notify(self, kind: NoticeKind, title: str, message: str) -> None:
        """Deliver a notice. Return value is never consumed."""
        ...
