"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel

from domain.entities.notice import Notice
from infrastructure.notifications.sinks import CollectingNotificationSink


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class NoticeResponse(BaseModel):
    """A user-facing notice raised while handling the request."""

    kind: str
    title: str
    message: str

    @classmethod
    def from_entity(cls, notice: Notice) -> "NoticeResponse":
        return cls(kind=notice.kind.value, title=notice.title, message=notice.message)


def notices_from(sink: CollectingNotificationSink) -> list[NoticeResponse]:
    """Render the notices collected by a request's sink."""
    return [NoticeResponse.from_entity(n) for n in sink.notices]
