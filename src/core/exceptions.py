"""Application exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Error codes returned in API error bodies."""

    # 401
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # 403
    FORBIDDEN = "FORBIDDEN"
    NOT_A_TEAM_MEMBER = "NOT_A_TEAM_MEMBER"
    NOT_TEAM_OWNER = "NOT_TEAM_OWNER"

    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # 404
    NOT_FOUND = "NOT_FOUND"
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    INVITATION_NOT_FOUND = "INVITATION_NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"

    # 409
    INVITATION_ALREADY_RESOLVED = "INVITATION_ALREADY_RESOLVED"
    ALREADY_A_TEAM_MEMBER = "ALREADY_A_TEAM_MEMBER"

    # 429
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # 500 / 503
    INTERNAL_ERROR = "INTERNAL_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"
    INVITATION_PARTIALLY_ACCEPTED = "INVITATION_PARTIALLY_ACCEPTED"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed or no user is signed in."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
            details=details,
        )


class NotATeamMemberError(AuthorizationError):
    """User is not a member of the team."""

    def __init__(self, team_id: str) -> None:
        super().__init__(
            message="You are not a member of this team",
            error_code=ErrorCode.NOT_A_TEAM_MEMBER,
            details={"team_id": team_id},
        )


class NotTeamOwnerError(AuthorizationError):
    """Only the team owner may perform this action."""

    def __init__(self, team_id: str | None = None) -> None:
        super().__init__(
            message="Only the team owner can do this",
            error_code=ErrorCode.NOT_TEAM_OWNER,
            details={"team_id": team_id} if team_id else None,
        )


class ValidationError(AppException):
    """A required field is empty or malformed. Raised before any gateway call."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message or f"{field} is required",
            status_code=400,
            details={"field": field},
        )


class NotFoundError(AppException):
    """A referenced resource no longer exists."""

    def __init__(
        self,
        message: str = "Resource not found",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class TeamNotFoundError(NotFoundError):
    """Team not found."""

    def __init__(self, team_id: str) -> None:
        super().__init__(
            message=f"Team not found: {team_id}",
            error_code=ErrorCode.TEAM_NOT_FOUND,
            details={"team_id": team_id},
        )


class InvitationNotFoundError(NotFoundError):
    """Invitation not found."""

    def __init__(self, invitation_id: str = "") -> None:
        super().__init__(
            message="Invitation not found",
            error_code=ErrorCode.INVITATION_NOT_FOUND,
            details={"invitation_id": invitation_id} if invitation_id else None,
        )


class TaskNotFoundError(NotFoundError):
    """Task not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            message=f"Task not found: {task_id}",
            error_code=ErrorCode.TASK_NOT_FOUND,
            details={"task_id": task_id},
        )


class InvitationAlreadyResolvedError(AppException):
    """The invitation was already accepted or declined."""

    def __init__(self, invitation_id: str, status: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVITATION_ALREADY_RESOLVED,
            message=f"This invitation has already been {status}",
            status_code=409,
            details={"invitation_id": invitation_id, "status": status},
        )


class AlreadyATeamMemberError(AppException):
    """The invitee already belongs to the team the invitation is for."""

    def __init__(self, team_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_TEAM_MEMBER,
            message="You are already a member of this team",
            status_code=409,
            details={"team_id": team_id},
        )


class BackendError(AppException):
    """The persistence gateway reported a failure."""

    def __init__(
        self,
        message: str = "The backend could not complete the request",
        error_code: ErrorCode = ErrorCode.BACKEND_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=503,
            details=details,
        )


class InvitationPartiallyAcceptedError(BackendError):
    """Invitation marked accepted but the membership insert failed.

    No compensating action is taken; the team owner has to re-grant access.
    """

    def __init__(self, invitation_id: str, team_id: str) -> None:
        super().__init__(
            message="Invitation was accepted but team membership could not be created",
            error_code=ErrorCode.INVITATION_PARTIALLY_ACCEPTED,
            details={"invitation_id": invitation_id, "team_id": team_id},
        )
