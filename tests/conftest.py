"""
Pytest Configuration and Fixtures

Provides common fixtures and test utilities for webhook service tests.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from svix.webhooks import Webhook

from clerk_webhooks.config import Settings, get_settings
from clerk_webhooks.main import app
from clerk_webhooks.routes.webhook import get_webhook_logger
from clerk_webhooks.services.supabase_service import SupabaseService, get_supabase_service

# Example signing secret from the Svix documentation
TEST_WEBHOOK_SECRET = "whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw"


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the local environment and .env file"""
    values: Dict[str, Any] = {
        "clerk_webhook_secret": TEST_WEBHOOK_SECRET,
        "supabase_url": "https://test-project.supabase.co",
        "supabase_service_role_key": "test-service-role-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def generate_svix_headers(
    payload: str,
    secret: str = TEST_WEBHOOK_SECRET,
    msg_id: str = "msg_test123",
    timestamp: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Generate valid Svix webhook headers for testing.

    Args:
        payload: JSON payload as string
        secret: Svix signing secret
        msg_id: Svix message ID
        timestamp: Signing time (defaults to now)

    Returns:
        Request headers including the three svix-* headers
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    signature = Webhook(secret).sign(msg_id, timestamp, payload)

    return {
        "svix-id": msg_id,
        "svix-timestamp": str(int(timestamp.timestamp())),
        "svix-signature": signature,
        "Content-Type": "application/json",
    }


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def mock_supabase_service():
    """Mock Supabase service echoing the written rows back"""
    mock = AsyncMock(spec=SupabaseService)
    mock.insert.side_effect = lambda table, record: dict(record)
    mock.update.side_effect = lambda table, record_id, values: {"id": record_id, **values}
    mock.health_check.return_value = True
    return mock


@pytest.fixture
def mock_logger():
    """Injected request logger"""
    return MagicMock()


@pytest.fixture
def override_dependencies(test_settings, mock_supabase_service, mock_logger):
    """Point the app at test settings, the mock Supabase service and the mock logger"""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_supabase_service] = lambda: mock_supabase_service
    app.dependency_overrides[get_webhook_logger] = lambda: mock_logger
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def test_client(override_dependencies):
    """FastAPI test client"""
    return TestClient(app)


@pytest.fixture
async def async_client(override_dependencies):
    """Async HTTP client for testing"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def signed_request():
    """Factory returning (body, headers) for a signed webhook delivery"""

    def _signed(event: Dict[str, Any], msg_id: str = "msg_test123"):
        body = json.dumps(event, separators=(",", ":"))
        return body, generate_svix_headers(body, msg_id=msg_id)

    return _signed


def clerk_event(event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap event data in a Clerk webhook envelope"""
    return {
        "data": data,
        "instance_id": "ins_test123",
        "object": "event",
        "timestamp": 1700000000000,
        "type": event_type,
    }


@pytest.fixture
def user_created_event() -> Dict[str, Any]:
    """Clerk user.created event"""
    return clerk_event(
        "user.created",
        {
            "id": "u1",
            "object": "user",
            "first_name": "A",
            "last_name": "B",
            "image_url": "img",
            "email_addresses": [
                {
                    "id": "idn_1",
                    "email_address": "a.b@example.com",
                    "verification": {"status": "verified", "strategy": "email_code"},
                }
            ],
            "primary_email_address_id": "idn_1",
            "public_metadata": {},
            "unsafe_metadata": {},
            "created_at": 0,
            "updated_at": 0,
        },
    )


@pytest.fixture
def user_updated_event() -> Dict[str, Any]:
    """Clerk user.updated event"""
    return clerk_event(
        "user.updated",
        {
            "id": "u1",
            "object": "user",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "image_url": "https://img.clerk.com/ada.png",
            "created_at": 0,
            "updated_at": 1700000000123,
        },
    )


@pytest.fixture
def organization_created_event() -> Dict[str, Any]:
    """Clerk organization.created event"""
    return clerk_event(
        "organization.created",
        {
            "id": "o1",
            "object": "organization",
            "name": "Acme",
            "slug": "acme",
            "created_by": "u1",
            "created_at": 1700000000000,
            "updated_at": 1700000000000,
        },
    )


@pytest.fixture
def organization_updated_event() -> Dict[str, Any]:
    """Clerk organization.updated event"""
    return clerk_event(
        "organization.updated",
        {
            "id": "o1",
            "object": "organization",
            "name": "Acme Corp",
            "created_at": 1700000000000,
            "updated_at": 1700000060000,
        },
    )


@pytest.fixture
def membership_created_event() -> Dict[str, Any]:
    """Clerk organizationMembership.created event"""
    return clerk_event(
        "organizationMembership.created",
        {
            "id": "orgmem_1",
            "object": "organization_membership",
            "role": "org:member",
            "organization": {
                "id": "o1",
                "name": "Acme",
                "created_at": 1700000000000,
                "updated_at": 1700000000000,
            },
            "public_user_data": {
                "user_id": "u2",
                "first_name": "Grace",
                "last_name": "Hopper",
                "image_url": "https://img.clerk.com/grace.png",
                "identifier": "grace@example.com",
            },
            "created_at": 1700000000000,
            "updated_at": 1700000000000,
        },
    )


@pytest.fixture
def membership_updated_event(membership_created_event) -> Dict[str, Any]:
    """Clerk organizationMembership.updated event"""
    event = json.loads(json.dumps(membership_created_event))
    event["type"] = "organizationMembership.updated"
    event["data"]["role"] = "org:admin"
    event["data"]["updated_at"] = 1700000120000
    return event
