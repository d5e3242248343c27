"""
Tests for version endpoint
"""
from fastapi import status


def test_version_endpoint_returns_version(client):
    """Test that version endpoint returns version information"""
    response = client.get("/api/v1/version")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()

    assert data["service"] == "leave-compliance"
    assert "version" in data
    assert data["env"] in ["local", "staging", "prod"]


def test_version_endpoint_accessible_without_auth(client):
    """Test that version endpoint is accessible without authentication"""
    response = client.get("/api/v1/version")

    assert response.status_code == status.HTTP_200_OK
