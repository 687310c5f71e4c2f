"""Task API routes."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_task_service, get_team_scope_controller
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.task import (
    TaskCreate,
    TaskDetailResponse,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.controllers.team_scope_controller import TeamScopeController
from domain.services.task_filters import TaskStatusFilter, filter_tasks, task_stats
from domain.services.task_service import TaskService

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks in the active scope",
    responses={
        200: {"description": "Tasks with scope and statistics metadata"},
        403: {"description": "Not a member of the selected team"},
        404: {"description": "Selected team not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_tasks(
    request: Request,
    user: CurrentUser,
    selector: TeamScopeController = Depends(get_team_scope_controller),
    service: TaskService = Depends(get_task_service),
    status_filter: TaskStatusFilter = Query(
        TaskStatusFilter.ALL, alias="filter", description="Completion/priority filter"
    ),
    search: str | None = Query(None, max_length=255, description="Case-insensitive text search"),
) -> TaskListResponse:
    """
    Get the tasks of the active scope.

    Personal tasks by default; send `X-Team-Id` to list a team's tasks.
    Statistics in `meta.stats` cover the whole scope, before filtering.
    """
    scope = selector.scope
    tasks = await service.list_for_scope(user.id, scope)
    visible = filter_tasks(tasks, status_filter, search)

    return TaskListResponse(
        data=[TaskResponse.from_entity(t) for t in visible],
        meta={
            "total": len(visible),
            "scope": "personal" if scope.is_personal else str(scope.team_id),
            "stats": asdict(task_stats(tasks)),
        },
    )


@router.post(
    "",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={
        201: {"description": "Task created in the active scope"},
        403: {"description": "Not a member of the selected team"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_task(
    request: Request,
    body: TaskCreate,
    user: CurrentUser,
    selector: TeamScopeController = Depends(get_team_scope_controller),
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Create a task in the active scope."""
    task = await service.create(
        user_id=user.id,
        scope=selector.scope,
        title=body.title,
        description=body.description,
        priority=body.priority,
        category=body.category,
        due_date=body.due_date,
    )
    return TaskDetailResponse(data=TaskResponse.from_entity(task))


@router.patch(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Update a task",
    responses={
        200: {"description": "Task updated successfully"},
        404: {"description": "Task not found"},
        422: {"description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_task(
    request: Request,
    task_id: UUID,
    body: TaskUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """
    Update an existing task. All fields are optional (partial update).

    Set `due_date` to `null` to clear it.
    """
    # Only pass due_date if explicitly set in request
    due_date = ... if "due_date" not in body.model_fields_set else body.due_date

    task = await service.update(
        task_id=task_id,
        user_id=user.id,
        title=body.title,
        description=body.description,
        priority=body.priority,
        category=body.category,
        due_date=due_date,
        completed=body.completed,
    )
    return TaskDetailResponse(data=TaskResponse.from_entity(task))


@router.post(
    "/{task_id}/toggle",
    response_model=TaskDetailResponse,
    summary="Toggle a task's completion",
    responses={
        200: {"description": "Task completion flipped"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def toggle_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Mark a pending task completed, or a completed task pending."""
    task = await service.toggle(task_id, user.id)
    return TaskDetailResponse(data=TaskResponse.from_entity(task))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={
        204: {"description": "Task deleted successfully"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> None:
    """Delete a task."""
    await service.delete(task_id, user.id)
    return None
