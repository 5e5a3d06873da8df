"""Tests for the health check endpoint."""

import pytest
from fastapi.testclient import TestClient

from src.main import app


@pytest.fixture
def client() -> TestClient:
    """Create a test client for FastAPI app."""
    return TestClient(app)


@pytest.mark.unit
def test_health_endpoint_returns_healthy(client: TestClient) -> None:
    """Test that health endpoint returns healthy status."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.unit
def test_cors_headers_present(client: TestClient) -> None:
    """Test that cross-origin requests are allowed by default."""
    response = client.get("/health", headers={"Origin": "http://127.0.0.1:5500"})

    assert response.headers["access-control-allow-origin"] == "*"
