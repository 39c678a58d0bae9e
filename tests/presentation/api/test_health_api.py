"""Tests for the health check router."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.solar_alerts.infrastructure.db.session import get_db_session
from app.solar_alerts.presentation.api.health import router


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create a mock database session."""
    return AsyncMock()


@pytest.fixture
def client(mock_session: AsyncMock) -> TestClient:
    """Create a test client for an app with the health router."""
    app = FastAPI()
    app.include_router(router, prefix="/api")

    async def override_session():
        yield mock_session

    app.dependency_overrides[get_db_session] = override_session
    return TestClient(app)


class TestHealth:
    """Tests for GET /api/health and /api/ready."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["notification_policy"] in ("cooldown", "batch_digest")

    def test_ready(self, client: TestClient, mock_session: AsyncMock) -> None:
        response = client.get("/api/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}
        mock_session.execute.assert_awaited_once()

    def test_not_ready_when_database_fails(
        self, client: TestClient, mock_session: AsyncMock
    ) -> None:
        mock_session.execute.side_effect = ConnectionRefusedError("db down")

        response = client.get("/api/ready")

        assert response.status_code == 503
