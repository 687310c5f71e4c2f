"""Pydantic schemas for Task API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.task import Task, TaskPriority


class TaskCreate(BaseModel):
    """Schema for creating a Task in the active scope."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str | None = Field(None, max_length=100)
    due_date: date | None = None


class TaskUpdate(BaseModel):
    """Schema for updating a Task (all fields optional)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    priority: TaskPriority | None = None
    category: str | None = Field(None, max_length=100)
    due_date: date | None = None
    completed: bool | None = None


class TaskResponse(BaseModel):
    """Schema for Task response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "789e4567-e89b-12d3-a456-426614174000",
                "team_id": None,
                "title": "Draft the style guide",
                "description": "Colors and typography first",
                "completed": False,
                "priority": "high",
                "category": "Design",
                "due_date": "2026-02-10",
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    team_id: UUID | None
    title: str
    description: str | None
    completed: bool
    priority: TaskPriority
    category: str
    due_date: date | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            user_id=task.user_id,
            team_id=task.team_id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            priority=task.priority,
            category=task.category,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskListResponse(BaseModel):
    """Schema for list of Tasks response."""

    data: list[TaskResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TaskDetailResponse(BaseModel):
    """Schema for single Task response."""

    data: TaskResponse
