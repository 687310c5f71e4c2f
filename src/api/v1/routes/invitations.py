"""Invitation API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import (
    get_invitation_controller,
    get_notification_sink,
    get_team_scope_controller,
    get_team_selector,
)
from api.v1.schemas.common import ErrorResponse, notices_from
from api.v1.schemas.invitation import (
    AcceptInvitationResponse,
    CreateInvitationRequest,
    DeclineInvitationResponse,
    InvitationDetailResponse,
    InvitationListResponse,
    InvitationResponse,
)
from api.v1.schemas.team import MembershipResponse, TeamResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.controllers.invitation_controller import InvitationController
from domain.controllers.team_scope_controller import TeamScopeController
from infrastructure.notifications.sinks import CollectingNotificationSink

# Team-scoped invitation routes
team_invitations_router = APIRouter(
    prefix="/teams/{team_id}/invitations",
    tags=["invitations"],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)

# User-scoped invitation routes (pending, accept, decline)
invitations_router = APIRouter(
    prefix="/invitations",
    tags=["invitations"],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)


@team_invitations_router.post(
    "",
    response_model=InvitationDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Invite an email address to a team",
    responses={
        201: {"description": "Invitation created"},
        403: {"description": "Only the team owner can invite"},
        404: {"description": "Team not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def send_invitation(
    request: Request,
    team_id: UUID,
    body: CreateInvitationRequest,
    user: CurrentUser,
    selector: TeamScopeController = Depends(get_team_scope_controller),
    invitations: InvitationController = Depends(get_invitation_controller),
    sink: CollectingNotificationSink = Depends(get_notification_sink),
) -> InvitationDetailResponse:
    """Invite someone to the team. Only the owner sees this action."""
    selector.select(team_id)
    selector.require_owner()
    invitation = await invitations.send(team_id, body.email)
    return InvitationDetailResponse(
        data=InvitationResponse.from_entity(invitation),
        notices=notices_from(sink),
    )


# --- User-scoped routes ---


@invitations_router.get(
    "/pending",
    response_model=InvitationListResponse,
    summary="Get pending invitations",
    responses={
        200: {"description": "Pending invitations addressed to the caller's email"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_pending_invitations(
    request: Request,
    user: CurrentUser,
    invitations: InvitationController = Depends(get_invitation_controller),
) -> InvitationListResponse:
    """Get all pending invitations for the current user's email."""
    pending = await invitations.load()
    data = [InvitationResponse.from_entity(inv) for inv in pending]
    return InvitationListResponse(data=data, meta={"total": len(data)})


@invitations_router.post(
    "/{invitation_id}/accept",
    response_model=AcceptInvitationResponse,
    summary="Accept invitation",
    responses={
        200: {"description": "Invitation accepted, caller added to the team"},
        404: {"description": "Invitation not found among the caller's pending ones"},
        409: {"description": "Invitation already resolved, or caller already in the team"},
        503: {"description": "Backend failure, possibly after the status changed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def accept_invitation(
    request: Request,
    invitation_id: UUID,
    user: CurrentUser,
    invitations: InvitationController = Depends(get_invitation_controller),
    selector: TeamScopeController = Depends(get_team_selector),
    sink: CollectingNotificationSink = Depends(get_notification_sink),
) -> AcceptInvitationResponse:
    """Accept a pending invitation and join the team as a member."""
    await invitations.load()
    membership = await invitations.accept(invitation_id)
    return AcceptInvitationResponse(
        data=MembershipResponse.from_entity(membership),
        teams=[TeamResponse.from_entity(team, user.id) for team in selector.teams],
        pending=[InvitationResponse.from_entity(inv) for inv in invitations.pending],
        notices=notices_from(sink),
    )


@invitations_router.post(
    "/{invitation_id}/decline",
    response_model=DeclineInvitationResponse,
    summary="Decline invitation",
    responses={
        200: {"description": "Invitation declined"},
        404: {"description": "Invitation not found among the caller's pending ones"},
        409: {"description": "Invitation already accepted or declined"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def decline_invitation(
    request: Request,
    invitation_id: UUID,
    user: CurrentUser,
    invitations: InvitationController = Depends(get_invitation_controller),
    sink: CollectingNotificationSink = Depends(get_notification_sink),
) -> DeclineInvitationResponse:
    """Decline a pending invitation. No membership is created."""
    await invitations.load()
    await invitations.reject(invitation_id)
    return DeclineInvitationResponse(
        pending=[InvitationResponse.from_entity(inv) for inv in invitations.pending],
        notices=notices_from(sink),
    )
