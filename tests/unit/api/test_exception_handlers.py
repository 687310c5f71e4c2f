"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    AuthenticationError,
    InvitationAlreadyResolvedError,
    InvitationPartiallyAcceptedError,
    TaskNotFoundError,
    ValidationError,
)


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str):  # type: ignore[no-untyped-def]
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_app_exception_returns_error_code_and_message(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise TaskNotFoundError("some-id")

        response = await _get(app, "/raise-app")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "TASK_NOT_FOUND"
        assert "some-id" in body["message"]
        assert body["details"]["task_id"] == "some-id"

    @pytest.mark.asyncio
    async def test_validation_error_is_400_with_field(self) -> None:
        app = _create_test_app()

        @app.get("/raise-validation")
        async def _() -> None:
            raise ValidationError("email", "Invitee email is required")

        response = await _get(app, "/raise-validation")

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "email"}

    @pytest.mark.asyncio
    async def test_already_resolved_is_409(self) -> None:
        app = _create_test_app()

        @app.get("/raise-resolved")
        async def _() -> None:
            raise InvitationAlreadyResolvedError("inv-1", "declined")

        response = await _get(app, "/raise-resolved")

        assert response.status_code == 409
        assert response.json()["details"]["status"] == "declined"

    @pytest.mark.asyncio
    async def test_partial_accept_is_503(self) -> None:
        app = _create_test_app()

        @app.get("/raise-partial")
        async def _() -> None:
            raise InvitationPartiallyAcceptedError("inv-1", "team-1")

        response = await _get(app, "/raise-partial")

        assert response.status_code == 503
        body = response.json()
        assert body["error_code"] == "INVITATION_PARTIALLY_ACCEPTED"
        assert body["details"] == {"invitation_id": "inv-1", "team_id": "team-1"}

    @pytest.mark.asyncio
    async def test_authentication_error_sets_www_authenticate(self) -> None:
        app = _create_test_app()

        @app.get("/raise-auth")
        async def _() -> None:
            raise AuthenticationError()

        response = await _get(app, "/raise-auth")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        response = await _get(app, "/raise-http")

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_request_validation_error_returns_field_details(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            title: str = Field(..., min_length=1)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"title": ""})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"], list)
        assert len(body["details"]) >= 1

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("Something went wrong"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
