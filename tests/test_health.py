"""Tests for health check API endpoints."""

from __future__ import annotations

import inspect

import pytest
from fastapi import status
from fastapi.testclient import TestClient


class TestHealthEndpoint:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_healthy_with_database(self, db, async_client):
        """GET /health reports healthy when the database answers."""
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"] == {"database": True}
        assert "version" in data

    def test_unhealthy_when_database_down(self, client: TestClient, mocker):
        """GET /health reports unhealthy when the database check fails."""
        from signaldash.database import connection

        mocker.patch.object(connection, "db_healthcheck", mocker.AsyncMock(return_value=False))
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "unhealthy"

    def test_response_carries_request_id(self, client: TestClient):
        """Responses echo the caller's request id."""
        response = client.get("/health/live", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_security_headers(self, client: TestClient):
        """Security headers are set on every response."""
        response = client.get("/health/live")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestLivenessEndpoint:
    """Tests for GET /health/live."""

    def test_live_returns_alive_status(self, client: TestClient):
        """GET /health/live returns alive status."""
        response = client.get("/health/live")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "alive"


class TestDbHealthcheck:
    """Tests for db_healthcheck function."""

    def test_db_healthcheck_is_coroutine(self):
        """db_healthcheck is an async function."""
        from signaldash.database.connection import db_healthcheck

        assert inspect.iscoroutinefunction(db_healthcheck)

    @pytest.mark.asyncio
    async def test_db_healthcheck_true_with_database(self, db):
        """db_healthcheck returns True against a live database."""
        from signaldash.database.connection import db_healthcheck

        assert await db_healthcheck() is True

    @pytest.mark.asyncio
    async def test_db_healthcheck_false_on_failure(self, mocker):
        """db_healthcheck swallows connection errors into False."""
        from signaldash.database import connection

        mocker.patch.object(connection, "get_engine", mocker.AsyncMock(side_effect=OSError("down")))
        assert await connection.db_healthcheck() is False


class TestMainApp:
    """Tests for the mounted application."""

    def test_root_info(self):
        """The root route describes the service."""
        from signaldash.main import create_app

        with TestClient(create_app()) as c:
            response = c.get("/")

        assert response.status_code == status.HTTP_200_OK

    def test_api_mounted_under_prefix(self):
        """API routes are served under /api."""
        from signaldash.main import create_app

        with TestClient(create_app()) as c:
            response = c.get("/api/health/live")

        assert response.json() == {"status": "alive"}
