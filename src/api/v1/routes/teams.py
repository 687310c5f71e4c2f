"""Team API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_notification_sink, get_team_scope_controller
from api.v1.schemas.common import ErrorResponse, notices_from
from api.v1.schemas.team import (
    TeamCreate,
    TeamDetailResponse,
    TeamListResponse,
    TeamResponse,
)
from core.exceptions import TeamNotFoundError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.controllers.team_scope_controller import TeamScopeController
from infrastructure.notifications.sinks import CollectingNotificationSink

router = APIRouter(
    prefix="/teams",
    tags=["teams"],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)


@router.get(
    "",
    response_model=TeamListResponse,
    summary="List my teams",
    responses={
        200: {"description": "Teams the caller owns or belongs to, newest first"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_teams(
    request: Request,
    user: CurrentUser,
    selector: TeamScopeController = Depends(get_team_scope_controller),
) -> TeamListResponse:
    """List the teams that can be selected as the task scope."""
    data = [TeamResponse.from_entity(team, user.id) for team in selector.teams]
    return TeamListResponse(
        data=data,
        meta={
            "total": len(data),
            "active_team_id": str(selector.active_team_id) if selector.active_team_id else None,
            "can_invite": selector.can_invite,
        },
    )


@router.post(
    "",
    response_model=TeamDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a team",
    responses={
        201: {"description": "Team created; the caller is its owner"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_team(
    request: Request,
    body: TeamCreate,
    user: CurrentUser,
    selector: TeamScopeController = Depends(get_team_scope_controller),
    sink: CollectingNotificationSink = Depends(get_notification_sink),
) -> TeamDetailResponse:
    """Create a team owned by the caller and make it the active scope."""
    team = await selector.create_team(body.name, body.description)
    return TeamDetailResponse(
        data=TeamResponse.from_entity(team, user.id),
        can_invite=selector.can_invite,
        notices=notices_from(sink),
    )


@router.get(
    "/{team_id}",
    response_model=TeamDetailResponse,
    summary="Get a team",
    responses={
        200: {"description": "Team details and whether the caller may invite"},
        404: {"description": "Team not found or not one of the caller's teams"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_team(
    request: Request,
    team_id: UUID,
    user: CurrentUser,
    selector: TeamScopeController = Depends(get_team_scope_controller),
) -> TeamDetailResponse:
    """Select a team and report whether its invite action is available."""
    selector.select(team_id)
    team = selector.active_team
    if team is None:
        raise TeamNotFoundError(str(team_id))
    return TeamDetailResponse(
        data=TeamResponse.from_entity(team, user.id),
        can_invite=selector.can_invite,
    )
