"""Invitation service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyATeamMemberError,
    BackendError,
    InvitationAlreadyResolvedError,
    InvitationNotFoundError,
    InvitationPartiallyAcceptedError,
    TeamNotFoundError,
    ValidationError,
)
from domain.entities.invitation import Invitation, InvitationStatus, normalize_email
from domain.entities.team import TeamMembership, TeamRole
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class InvitationService:
    """Gateway-facing invitation operations. Holds no state between calls."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        atomic_accept: bool = False,
    ) -> None:
        self._uow_factory = uow_factory
        self._atomic_accept = atomic_accept

    async def list_pending(self, recipient_email: str) -> list[Invitation]:
        """Get pending invitations addressed to an email, with team names.

        Returns an empty list when there are none.

        Raises:
            BackendError: If the store cannot be queried.
        """
        email = normalize_email(recipient_email or "")
        if not email:
            return []
        async with self._uow_factory() as uow:
            return await uow.invitations.get_pending_for_email(email)  # type: ignore[no-any-return]

    async def send(
        self,
        team_id: UUID,
        invitee_email: str,
        inviter_email: str,
    ) -> Invitation:
        """Create a pending invitation for ``invitee_email`` to join a team.

        Ownership of the team is not checked here. Multiple pending
        invitations for the same (team, email) are allowed.

        Raises:
            ValidationError: If either email is blank. No store call is made.
            TeamNotFoundError: If the team does not exist.
            BackendError: If the insert fails.
        """
        invitee = normalize_email(invitee_email or "")
        if not invitee:
            raise ValidationError("email", "Invitee email is required")
        inviter = normalize_email(inviter_email or "")
        if not inviter:
            raise ValidationError("invited_by", "Inviter email is required")

        async with self._uow_factory() as uow:
            team = await uow.teams.get(team_id)
            if not team:
                raise TeamNotFoundError(str(team_id))

            invitation = Invitation(team_id=team_id, email=invitee, invited_by=inviter)
            created = await uow.invitations.create(invitation)
            await uow.commit()

        created.team_name = team.name
        logger.info("invitation_sent", invitation_id=str(created.id), team_id=str(team_id))
        return created

    async def accept(self, invitation: Invitation, user_id: UUID) -> TeamMembership:
        """Accept an invitation on behalf of ``user_id``.

        Two store commands, in order: mark the invitation accepted, then insert
        a member row. Unless ``atomic_accept`` is set they commit separately,
        and the insert is only attempted once the status update has committed.
        A failed insert leaves the invitation accepted without a membership.

        If the user already belongs to the team the invitation is still marked
        accepted, so it cannot be reused, and no member row is inserted.

        Raises:
            InvitationAlreadyResolvedError: If the invitation is not pending.
            InvitationNotFoundError: If the invitation no longer exists.
            AlreadyATeamMemberError: If the user is already in the team.
            InvitationPartiallyAcceptedError: If the status update committed
                but the membership insert failed.
            BackendError: If the status update fails.
        """
        self._require_pending(invitation)
        membership = TeamMembership(
            team_id=invitation.team_id,
            user_id=user_id,
            role=TeamRole.MEMBER,
        )

        added: TeamMembership | None = None
        async with self._uow_factory() as uow:
            await self._resolve(uow, invitation.id, InvitationStatus.ACCEPTED)
            existing = await uow.teams.get_member(invitation.team_id, user_id)
            if existing is None and self._atomic_accept:
                added = await uow.teams.add_member(membership)
            await uow.commit()
        invitation.accept()

        if existing is not None:
            logger.info(
                "invitation_accepted_existing_member",
                invitation_id=str(invitation.id),
                team_id=str(invitation.team_id),
                role=existing.role.value,
            )
            raise AlreadyATeamMemberError(str(invitation.team_id))

        if added is None:
            try:
                async with self._uow_factory() as uow:
                    added = await uow.teams.add_member(membership)
                    await uow.commit()
            except BackendError as exc:
                logger.error(
                    "invitation_accepted_without_membership",
                    invitation_id=str(invitation.id),
                    team_id=str(invitation.team_id),
                    user_id=str(user_id),
                    error=exc.message,
                )
                raise InvitationPartiallyAcceptedError(
                    str(invitation.id), str(invitation.team_id)
                ) from exc

        logger.info(
            "invitation_accepted",
            invitation_id=str(invitation.id),
            team_id=str(invitation.team_id),
            atomic=self._atomic_accept,
        )
        return added

    async def decline(self, invitation: Invitation) -> None:
        """Mark a pending invitation declined. Creates no membership.

        Raises:
            InvitationAlreadyResolvedError: If the invitation is not pending.
            InvitationNotFoundError: If the invitation no longer exists.
            BackendError: If the update fails; the invitation stays pending.
        """
        self._require_pending(invitation)
        async with self._uow_factory() as uow:
            await self._resolve(uow, invitation.id, InvitationStatus.DECLINED)
            await uow.commit()
        invitation.decline()
        logger.info("invitation_declined", invitation_id=str(invitation.id))

    # --- Internal helpers ---

    @staticmethod
    def _require_pending(invitation: Invitation) -> None:
        if not invitation.is_pending:
            raise InvitationAlreadyResolvedError(str(invitation.id), invitation.status.value)

    @staticmethod
    async def _resolve(uow: IUnitOfWork, invitation_id: UUID, status: InvitationStatus) -> None:
        """Apply a terminal status, translating a no-op update into the reason."""
        if await uow.invitations.resolve(invitation_id, status):
            return
        current = await uow.invitations.get_by_id(invitation_id)
        if current is None:
            raise InvitationNotFoundError(str(invitation_id))
        raise InvitationAlreadyResolvedError(str(invitation_id), current.status.value)
