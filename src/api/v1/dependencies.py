"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from fastapi import Depends

from api.dependencies.auth import CurrentUser, TeamId
from core.config import settings
from domain.controllers.invitation_controller import InvitationController
from domain.controllers.team_scope_controller import TeamScopeController
from domain.services.invitation_service import InvitationService
from domain.services.membership_service import MembershipService
from domain.services.task_service import TaskService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.notifications.sinks import CollectingNotificationSink


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_membership_service() -> MembershipService:
    """Get Membership service instance."""
    return MembershipService(get_uow_factory())


@lru_cache
def get_invitation_service() -> InvitationService:
    """Get Invitation service instance."""
    return InvitationService(
        get_uow_factory(),
        atomic_accept=settings.atomic_invitation_accept,
    )


@lru_cache
def get_task_service() -> TaskService:
    """Get Task service instance."""
    return TaskService(
        get_uow_factory(),
        default_category=settings.default_task_category,
    )


def get_notification_sink() -> CollectingNotificationSink:
    """A fresh sink per request; its notices are echoed in the response."""
    return CollectingNotificationSink()


async def get_team_selector(
    user: CurrentUser,
    sink: CollectingNotificationSink = Depends(get_notification_sink),
    service: MembershipService = Depends(get_membership_service),
) -> TeamScopeController:
    """Team selector for this request, loaded but left in the personal scope.

    User-scoped routes such as pending invitations take this one so a stale
    X-Team-Id header cannot fail them.
    """
    controller = TeamScopeController(service, user, sink)
    await controller.refresh()
    return controller


async def get_team_scope_controller(
    team_id: TeamId,
    selector: TeamScopeController = Depends(get_team_selector),
) -> TeamScopeController:
    """Team selector for this request, scoped by the X-Team-Id header."""
    if team_id is not None:
        selector.select(team_id)
    return selector


async def get_invitation_controller(
    user: CurrentUser,
    sink: CollectingNotificationSink = Depends(get_notification_sink),
    service: InvitationService = Depends(get_invitation_service),
    selector: TeamScopeController = Depends(get_team_selector),
) -> InvitationController:
    """Invitation manager for this request.

    Accepting an invitation refreshes the team selector so the response can
    carry the new team list.
    """
    return InvitationController(
        service,
        user,
        sink,
        on_membership_changed=selector.refresh,
    )
