"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        """Test that health endpoint returns 200 OK."""
        response = await client.get("/health")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_returns_correct_structure(self, client: AsyncClient) -> None:
        """Test that health endpoint returns expected structure."""
        response = await client.get("/health")
        data = response.json()

        assert "status" in data
        assert "version" in data
        assert "timestamp" in data
        assert "environment" in data

    @pytest.mark.asyncio
    async def test_health_status_is_healthy(self, client: AsyncClient) -> None:
        """Test that health status is 'healthy'."""
        response = await client.get("/health")
        data = response.json()

        assert data["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_version_format(self, client: AsyncClient) -> None:
        """Test that version has expected format."""
        response = await client.get("/health")
        data = response.json()

        # Check version follows semver pattern
        assert data["version"] == "1.0.0"

    @pytest.mark.asyncio
    async def test_health_sets_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert "x-request-id" in response.headers


class TestDetailedHealthEndpoint:
    """Tests for the detailed health check endpoint."""

    @pytest.mark.asyncio
    async def test_reports_database_and_schema(self, client: AsyncClient) -> None:
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["schema_status"] == "ok"
        assert data["missing_tables"] == []

    @pytest.mark.asyncio
    async def test_missing_table_degrades_status(self, client: AsyncClient, engine) -> None:
        from sqlalchemy import text

        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE tasks"))

        response = await client.get("/health/detailed")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["schema_status"] == "missing_tables"
        assert data["missing_tables"] == ["tasks"]
