"""
Event Router

Routes Clerk webhook events to handlers based on event type.

Each routed event results in exactly one Supabase write. Event types without
a handler are acknowledged with ``{"success": true}`` and nothing is written.
A Supabase error ends the request with a 500 carrying the store's message;
nothing is retried here (Svix redelivers failed webhooks on its own schedule).
"""

from typing import Any, Awaitable, Callable, Dict

from pydantic import BaseModel

from clerk_webhooks.handlers import membership_handler, organization_handler, user_handler
from clerk_webhooks.models.clerk_events import ClerkEvent, ClerkEventType
from clerk_webhooks.services.supabase_service import SupabaseService
from clerk_webhooks.utils.exceptions import SupabaseAPIException
from clerk_webhooks.utils.logging_config import LoggerLike

EventHandler = Callable[[ClerkEvent, SupabaseService, LoggerLike], Awaitable[Dict[str, Any]]]


# Event type to handler function mapping
EVENT_HANDLERS: Dict[ClerkEventType, EventHandler] = {
    # User events
    ClerkEventType.USER_CREATED: user_handler.handle_user_created,
    ClerkEventType.USER_UPDATED: user_handler.handle_user_updated,

    # Organization events
    ClerkEventType.ORGANIZATION_CREATED: organization_handler.handle_organization_created,
    ClerkEventType.ORGANIZATION_UPDATED: organization_handler.handle_organization_updated,

    # Membership events
    ClerkEventType.ORGANIZATION_MEMBERSHIP_CREATED: membership_handler.handle_membership_created,
    ClerkEventType.ORGANIZATION_MEMBERSHIP_UPDATED: membership_handler.handle_membership_updated,
}


class RouteResult(BaseModel):
    """HTTP status and JSON body produced for a routed event"""

    status_code: int
    body: Dict[str, Any]


class EventRouter:
    """
    Routes Clerk webhook events to their handlers.

    Attributes:
        supabase: Supabase service the handlers write through
        logger: Request-scoped logger for all routing diagnostics
    """

    def __init__(self, supabase: SupabaseService, logger: LoggerLike):
        self.supabase = supabase
        self.logger = logger

    async def route_event(self, event: ClerkEvent) -> RouteResult:
        """
        Route a Clerk event to its handler.

        Args:
            event: Validated Clerk event

        Returns:
            RouteResult with:
                - 200 and the handler body (``{"user": ...}`` or ``{"data": ...}``)
                - 200 and ``{"success": true}`` for unhandled event types
                - 500 and ``{"error": <message>}`` if the Supabase write failed
        """
        try:
            handler = EVENT_HANDLERS.get(ClerkEventType(event.type))
        except ValueError:
            handler = None

        if handler is None:
            self.logger.info(
                f"Unhandled event type: {event.type}",
                extra={
                    "event_type": event.type,
                    "event": event.model_dump(mode="json"),
                },
            )
            return RouteResult(status_code=200, body={"success": True})

        handler_name = handler.__name__

        self.logger.info(
            f"Routing event: {event.type} ({event.data.id})",
            extra={
                "event_type": event.type,
                "category": event.event_type_category,
                "action": event.event_action,
                "handler": handler_name,
            },
        )

        try:
            body = await handler(event, self.supabase, self.logger)
        except SupabaseAPIException as e:
            self.logger.error(
                f"Handler {handler_name} failed for {event.type} ({event.data.id}): {e.message}",
                extra={
                    "event_type": event.type,
                    "handler": handler_name,
                    "error": e.to_dict(),
                },
            )
            return RouteResult(status_code=500, body={"error": e.message})

        self.logger.info(
            f"Event processed successfully: {event.type}",
            extra={"event_type": event.type, "handler": handler_name},
        )
        return RouteResult(status_code=200, body=body)


def get_supported_event_types() -> list[str]:
    """
    Get list of all routed Clerk event types.

    Useful when subscribing the Clerk webhook endpoint to events.
    """
    return [event_type.value for event_type in EVENT_HANDLERS]
