"""Shared plumbing for per-session controllers."""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from core.exceptions import AppException, AuthenticationError
from domain.entities.notice import NoticeKind
from domain.ports import Identity, INotificationSink

logger = structlog.get_logger()

ERROR_TITLE = "Error"


class Controller:
    """Base for objects that own session state on behalf of one user.

    Every public operation runs inside ``_reporting``: application errors are
    logged, reported to the notification sink with a generic message and
    re-raised unchanged.
    """

    def __init__(self, user: Identity | None, sink: INotificationSink) -> None:
        self._user = user
        self._sink = sink

    @property
    def user(self) -> Identity | None:
        return self._user

    def _require_user(self) -> Identity:
        if self._user is None:
            raise AuthenticationError()
        return self._user

    def _success(self, title: str, message: str) -> None:
        self._sink.notify(NoticeKind.SUCCESS, title, message)

    @contextmanager
    def _reporting(self, operation: str, failure_message: str) -> Iterator[None]:
        try:
            yield
        except AppException as exc:
            logger.warning(
                "operation_failed",
                controller=type(self).__name__,
                operation=operation,
                error_code=exc.error_code.value,
                error=exc.message,
                details=exc.details,
            )
            self._sink.notify(NoticeKind.ERROR, ERROR_TITLE, failure_message)
            raise
