"""Notification sink implementations."""

import structlog

from domain.entities.notice import Notice, NoticeKind

logger = structlog.get_logger()


class LogNotificationSink:
    """Writes notices to the structured log only."""

    def notify(self, kind: NoticeKind, title: str, message: str) -> None:
        log = logger.info if kind == NoticeKind.SUCCESS else logger.warning
        log("user_notice", kind=kind.value, title=title, notice=message)


class CollectingNotificationSink(LogNotificationSink):
    """Keeps the notices raised while serving one request.

    The API layer echoes them back to the client in the response body.
    """

    def __init__(self) -> None:
        self._notices: list[Notice] = []

    @property
    def notices(self) -> list[Notice]:
        return list(self._notices)

    def notify(self, kind: NoticeKind, title: str, message: str) -> None:
        super().notify(kind, title, message)
        self._notices.append(Notice(kind=kind, title=title, message=message))

    def clear(self) -> None:
        self._notices.clear()
