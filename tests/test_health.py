"""
Test Health Check Endpoints
"""

from clerk_webhooks.config import get_settings
from clerk_webhooks.main import app
from clerk_webhooks.services.supabase_service import get_supabase_service
from conftest import make_settings


def test_health_check(test_client):
    response = test_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "1.0.0"


def test_readiness_check_ready(test_client, mock_supabase_service):
    response = test_client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["dependencies"]["supabase"]["reachable"] is True
    assert "user.created" in data["dependencies"]["clerk"]["event_types"]
    mock_supabase_service.health_check.assert_awaited_once()


def test_readiness_check_without_secret(test_client):
    app.dependency_overrides[get_settings] = lambda: make_settings(clerk_webhook_secret=None)

    response = test_client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["dependencies"]["clerk"]["webhook_secret_configured"] is False


def test_readiness_check_without_supabase(test_client):
    app.dependency_overrides[get_supabase_service] = lambda: None

    response = test_client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["dependencies"]["supabase"]["credentials_configured"] is False


def test_readiness_check_supabase_unreachable(test_client, mock_supabase_service):
    mock_supabase_service.health_check.return_value = False

    response = test_client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
