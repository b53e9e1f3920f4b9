"""
Clerk Webhook Endpoint

Handles incoming Clerk webhook events: configuration and Svix header checks,
signature verification, and one Supabase write per event.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from clerk_webhooks.config import Settings, get_settings
from clerk_webhooks.handlers.event_router import EventRouter
from clerk_webhooks.services.clerk_service import SVIX_ID_HEADER, clerk_service
from clerk_webhooks.services.supabase_service import SupabaseService, get_supabase_service
from clerk_webhooks.utils.exceptions import ClerkException, ClerkSignatureException
from clerk_webhooks.utils.logging_config import LoggerLike, get_request_logger

router = APIRouter(prefix="/webhook", tags=["webhook"])


def get_webhook_logger(request: Request) -> LoggerLike:
    """Request-scoped logger injected into the dispatcher, bound to the Svix message ID"""
    return get_request_logger("routes.webhook", svix_id=request.headers.get(SVIX_ID_HEADER))


@router.post("/clerk")
async def clerk_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    supabase: Optional[SupabaseService] = Depends(get_supabase_service),
    logger: LoggerLike = Depends(get_webhook_logger),
):
    """
    Clerk webhook endpoint.

    Checks, in order, the webhook secret, the Svix headers and the Supabase
    credentials, then verifies and parses the event and routes it to its
    handler. Each step short-circuits with its own error response.
    """
    if not settings.has_webhook_secret:
        logger.error("Webhook secret not configured")
        return PlainTextResponse("Webhook secret not configured", status_code=500)

    svix_headers = clerk_service.extract_svix_headers(request)
    if svix_headers is None:
        logger.warning("Webhook request missing svix headers")
        return PlainTextResponse("Error occured -- no svix headers", status_code=400)

    if not settings.has_supabase_credentials or supabase is None:
        logger.error("Supabase credentials not configured")
        return PlainTextResponse("Supabase credentials not configured", status_code=500)

    payload = await request.body()

    try:
        if settings.clerk_verify_signatures:
            payload_json = clerk_service.verify_webhook_signature(
                settings.clerk_webhook_secret, payload, svix_headers
            )
        else:
            payload_json = clerk_service.decode_payload(payload)

        event = clerk_service.parse_event(payload_json)

    except ClerkSignatureException as e:
        logger.error(
            "Webhook signature verification failed",
            extra={"error": str(e)},
        )
        raise HTTPException(status_code=400, detail="Invalid signature")

    except ClerkException as e:
        logger.error(
            f"Clerk webhook error: {e.message}",
            extra={"error": e.to_dict()},
        )
        raise HTTPException(status_code=400, detail=e.message)

    logger.info(
        "Received Clerk webhook event",
        extra={
            "event_type": event.type,
            "object_id": event.data.id,
        },
    )

    result = await EventRouter(supabase, logger).route_event(event)

    return JSONResponse(status_code=result.status_code, content=result.body)
