"""Unit tests for SQLAlchemyUnitOfWork error translation."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from core.exceptions import BackendError, ValidationError
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def uow(session: AsyncMock) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(MagicMock(return_value=session))


class TestErrorTranslation:
    @pytest.mark.asyncio
    async def test_sqlalchemy_error_becomes_backend_error(
        self, uow: SQLAlchemyUnitOfWork, session: AsyncMock
    ) -> None:
        with pytest.raises(BackendError) as exc_info:
            async with uow:
                raise OperationalError("SELECT 1", {}, Exception("relation does not exist"))

        assert exc_info.value.details == {"reason": "OperationalError"}
        assert isinstance(exc_info.value.__cause__, OperationalError)
        session.rollback.assert_awaited_once()
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_integrity_error_becomes_backend_error(self, uow: SQLAlchemyUnitOfWork) -> None:
        with pytest.raises(BackendError):
            async with uow:
                raise IntegrityError("INSERT", {}, Exception("duplicate key"))

    @pytest.mark.asyncio
    async def test_connection_error_becomes_backend_error(self, uow: SQLAlchemyUnitOfWork) -> None:
        with pytest.raises(BackendError):
            async with uow:
                raise ConnectionRefusedError("connection refused")

    @pytest.mark.asyncio
    async def test_app_errors_pass_through(
        self, uow: SQLAlchemyUnitOfWork, session: AsyncMock
    ) -> None:
        with pytest.raises(ValidationError):
            async with uow:
                raise ValidationError("name")

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_clean_exit_does_not_roll_back(
        self, uow: SQLAlchemyUnitOfWork, session: AsyncMock
    ) -> None:
        async with uow:
            await uow.commit()

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()
        session.close.assert_awaited_once()


class TestRepositories:
    def test_repositories_require_context(self, uow: SQLAlchemyUnitOfWork) -> None:
        with pytest.raises(RuntimeError):
            _ = uow.teams
        with pytest.raises(RuntimeError):
            _ = uow.invitations
        with pytest.raises(RuntimeError):
            _ = uow.tasks
