"""Pending-invitation state for one signed-in user."""

from collections.abc import Awaitable, Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyATeamMemberError,
    BackendError,
    InvitationAlreadyResolvedError,
    InvitationNotFoundError,
    InvitationPartiallyAcceptedError,
)
from domain.controllers.base import Controller
from domain.entities.invitation import Invitation
from domain.entities.team import TeamMembership
from domain.ports import Identity, INotificationSink
from domain.services.invitation_service import InvitationService

logger = structlog.get_logger()


class InvitationController(Controller):
    """Owns the list of invitations waiting on the current user.

    The list is only ever replaced wholesale by ``load`` or pruned by this
    object after an accept/decline. Accept and decline resolve their target
    from the loaded list and never re-fetch it.
    """

    def __init__(
        self,
        service: InvitationService,
        user: Identity | None,
        sink: INotificationSink,
        on_membership_changed: Callable[[], Awaitable[object]] | None = None,
    ) -> None:
        super().__init__(user, sink)
        self._service = service
        self._on_membership_changed = on_membership_changed
        self._pending: list[Invitation] = []

    @property
    def pending(self) -> list[Invitation]:
        """A copy of the currently loaded pending invitations."""
        return list(self._pending)

    async def load(self) -> list[Invitation]:
        """Fetch the user's pending invitations, replacing the loaded list."""
        with self._reporting("load", "Could not load your invitations."):
            user = self._require_user()
            self._pending = await self._service.list_pending(user.email)
        return self.pending

    async def send(self, team_id: UUID, invitee_email: str) -> Invitation:
        """Invite an email address to a team, as the current user."""
        with self._reporting("send", "Could not send the invitation."):
            user = self._require_user()
            invitation = await self._service.send(team_id, invitee_email, user.email)
        self._success("Invitation sent", f"Invitation sent to {invitation.email}")
        return invitation

    async def accept(self, invitation_id: UUID) -> TeamMembership:
        """Accept a loaded invitation and join its team as a member."""
        with self._reporting("accept", "Could not accept the invitation."):
            user = self._require_user()
            invitation = self._find(invitation_id)
            try:
                membership = await self._service.accept(invitation, user.id)
            except (
                AlreadyATeamMemberError,
                InvitationAlreadyResolvedError,
                InvitationPartiallyAcceptedError,
            ):
                self._drop(invitation_id)
                raise

        self._drop(invitation_id)
        self._success("Accepted", "You joined the team.")
        await self._notify_membership_changed()
        return membership

    async def reject(self, invitation_id: UUID) -> None:
        """Decline a loaded invitation."""
        with self._reporting("reject", "Could not decline the invitation."):
            self._require_user()
            invitation = self._find(invitation_id)
            try:
                await self._service.decline(invitation)
            except InvitationAlreadyResolvedError:
                self._drop(invitation_id)
                raise

        self._drop(invitation_id)
        self._success("Declined", "You declined the invitation.")

    # --- Internal helpers ---

    def _find(self, invitation_id: UUID) -> Invitation:
        for invitation in self._pending:
            if invitation.id == invitation_id:
                return invitation
        raise InvitationNotFoundError(str(invitation_id))

    def _drop(self, invitation_id: UUID) -> None:
        self._pending = [i for i in self._pending if i.id != invitation_id]

    async def _notify_membership_changed(self) -> None:
        if self._on_membership_changed is None:
            return
        try:
            await self._on_membership_changed()
        except BackendError as exc:
            # The accept itself succeeded; the listener has reported its own failure.
            logger.warning("membership_refresh_failed", error=exc.message)
