"""
Test Event Router

Tests event routing, the default branch and store error mapping.
"""

import pytest

from clerk_webhooks.handlers.event_router import (
    EVENT_HANDLERS,
    EventRouter,
    get_supported_event_types,
)
from clerk_webhooks.models.clerk_events import ClerkEvent, ClerkEventType
from clerk_webhooks.utils.exceptions import SupabaseAPIException


@pytest.mark.asyncio
async def test_route_user_created_event(user_created_event, mock_supabase_service, mock_logger):
    event = ClerkEvent(**user_created_event)
    router = EventRouter(mock_supabase_service, mock_logger)

    result = await router.route_event(event)

    assert result.status_code == 200
    assert result.body["user"]["id"] == "u1"
    mock_supabase_service.insert.assert_called_once()
    mock_logger.error.assert_not_called()


@pytest.mark.asyncio
async def test_route_organization_updated_event(
    organization_updated_event, mock_supabase_service, mock_logger
):
    event = ClerkEvent(**organization_updated_event)
    router = EventRouter(mock_supabase_service, mock_logger)

    result = await router.route_event(event)

    assert result.status_code == 200
    assert result.body == {
        "data": {"id": "o1", "name": "Acme Corp", "updated_at": "2023-11-14T22:14:20.000Z"}
    }
    assert mock_supabase_service.update.await_args.args[0] == "owners"


@pytest.mark.asyncio
async def test_unsupported_event_type(mock_supabase_service, mock_logger):
    """Unknown event types are acknowledged without touching the store"""
    event = ClerkEvent(type="session.created", data={"id": "sess_1"})
    router = EventRouter(mock_supabase_service, mock_logger)

    result = await router.route_event(event)

    assert result.status_code == 200
    assert result.body == {"success": True}
    mock_supabase_service.insert.assert_not_called()
    mock_supabase_service.update.assert_not_called()

    message = mock_logger.info.call_args.args[0]
    assert "Unhandled event type" in message
    assert mock_logger.info.call_args.kwargs["extra"]["event"]["data"]["id"] == "sess_1"


@pytest.mark.asyncio
async def test_store_error_returns_500_and_logs(
    user_created_event, mock_supabase_service, mock_logger
):
    mock_supabase_service.insert.side_effect = SupabaseAPIException(
        'duplicate key value violates unique constraint "users_pkey"',
        status_code=409,
    )
    event = ClerkEvent(**user_created_event)
    router = EventRouter(mock_supabase_service, mock_logger)

    result = await router.route_event(event)

    assert result.status_code == 500
    assert result.body == {"error": 'duplicate key value violates unique constraint "users_pkey"'}
    mock_logger.error.assert_called_once()
    assert "handle_user_created" in mock_logger.error.call_args.args[0]


@pytest.mark.asyncio
async def test_non_store_errors_propagate(user_created_event, mock_supabase_service, mock_logger):
    mock_supabase_service.insert.side_effect = RuntimeError("boom")
    router = EventRouter(mock_supabase_service, mock_logger)

    with pytest.raises(RuntimeError):
        await router.route_event(ClerkEvent(**user_created_event))


def test_every_event_type_has_a_handler():
    assert set(EVENT_HANDLERS) == set(ClerkEventType)


def test_get_supported_event_types():
    assert get_supported_event_types() == [
        "user.created",
        "user.updated",
        "organization.created",
        "organization.updated",
        "organizationMembership.created",
        "organizationMembership.updated",
    ]
