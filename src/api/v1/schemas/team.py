"""Pydantic schemas for Team API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.common import NoticeResponse
from domain.entities.team import Team, TeamMembership, is_owner


class TeamCreate(BaseModel):
    """Schema for creating a Team."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)


class TeamResponse(BaseModel):
    """Schema for Team response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Design Guild",
                "description": "Brand and product design",
                "owner_id": "789e4567-e89b-12d3-a456-426614174000",
                "is_owner": True,
                "created_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    description: str | None
    owner_id: UUID
    is_owner: bool = False
    created_at: datetime

    @classmethod
    def from_entity(cls, team: Team, user_id: UUID) -> "TeamResponse":
        return cls(
            id=team.id,
            name=team.name,
            description=team.description,
            owner_id=team.owner_id,
            is_owner=is_owner(team, user_id),
            created_at=team.created_at,
        )


class TeamListResponse(BaseModel):
    """Schema for list of Teams response."""

    data: list[TeamResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TeamDetailResponse(BaseModel):
    """Schema for single Team response."""

    data: TeamResponse
    can_invite: bool = False
    notices: list[NoticeResponse] = Field(default_factory=list)


class MembershipResponse(BaseModel):
    """Schema for TeamMembership response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    team_id: UUID
    user_id: UUID
    role: str
    joined_at: datetime

    @classmethod
    def from_entity(cls, membership: TeamMembership) -> "MembershipResponse":
        return cls(
            id=membership.id,
            team_id=membership.team_id,
            user_id=membership.user_id,
            role=membership.role.value,
            joined_at=membership.joined_at,
        )
