"""Pydantic schemas for Invitation API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.common import NoticeResponse
from api.v1.schemas.team import MembershipResponse, TeamResponse
from domain.entities.invitation import Invitation


class CreateInvitationRequest(BaseModel):
    """Schema for inviting an email address to a team."""

    email: str = Field(..., min_length=3, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Basic email validation."""
        v = v.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Invalid email address")
        return v


class InvitationResponse(BaseModel):
    """Schema for Invitation response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "team_id": "456e4567-e89b-12d3-a456-426614174000",
                "team_name": "Design Guild",
                "email": "user@example.com",
                "invited_by": "owner@example.com",
                "status": "pending",
                "created_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    team_id: UUID
    team_name: str | None = None
    email: str
    invited_by: str
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "InvitationResponse":
        return cls(
            id=invitation.id,
            team_id=invitation.team_id,
            team_name=invitation.team_name,
            email=invitation.email,
            invited_by=invitation.invited_by,
            status=invitation.status.value,
            created_at=invitation.created_at,
        )


class InvitationListResponse(BaseModel):
    """Schema for list of Invitations response."""

    data: list[InvitationResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class InvitationDetailResponse(BaseModel):
    """Schema for a sent invitation."""

    data: InvitationResponse
    notices: list[NoticeResponse] = Field(default_factory=list)


class AcceptInvitationResponse(BaseModel):
    """Schema for accepting an invitation response.

    ``teams`` is the caller's team list after the selector refreshed.
    """

    data: MembershipResponse
    teams: list[TeamResponse] = Field(default_factory=list)
    pending: list[InvitationResponse] = Field(default_factory=list)
    notices: list[NoticeResponse] = Field(default_factory=list)


class DeclineInvitationResponse(BaseModel):
    """Schema for declining an invitation response."""

    message: str = "Invitation declined"
    pending: list[InvitationResponse] = Field(default_factory=list)
    notices: list[NoticeResponse] = Field(default_factory=list)
