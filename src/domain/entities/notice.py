"""User-facing notice value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class NoticeKind(StrEnum):
    """Kind of a short-lived user-facing message."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """A message destined for the user (rendered as a toast by clients)."""

    kind: NoticeKind
    title: str
    message: str
    created_at: datetime = field(default_factory=datetime.utcnow)
