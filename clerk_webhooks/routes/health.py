"""
Health Check and Monitoring Endpoints

Provides health status and dependency checks for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from clerk_webhooks.config import Settings, get_settings
from clerk_webhooks.handlers.event_router import get_supported_event_types
from clerk_webhooks.services.supabase_service import SupabaseService, get_supabase_service
from clerk_webhooks.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Basic health check endpoint.
    Returns 200 if application is running.
    """
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version,
        },
    )


@router.get("/health/ready")
async def readiness_check(
    settings: Settings = Depends(get_settings),
    supabase: Optional[SupabaseService] = Depends(get_supabase_service),
):
    """
    Readiness check endpoint.
    Verifies that:
    - The Clerk webhook secret is configured
    - Supabase credentials are configured and the REST API answers
    """
    dependencies: Dict[str, Any] = {}
    overall_healthy = True

    dependencies["clerk"] = {
        "status": "healthy" if settings.has_webhook_secret else "unhealthy",
        "webhook_secret_configured": settings.has_webhook_secret,
        "verify_signatures": settings.clerk_verify_signatures,
        "event_types": get_supported_event_types(),
    }
    if not settings.has_webhook_secret:
        overall_healthy = False

    if supabase is None:
        dependencies["supabase"] = {
            "status": "unhealthy",
            "credentials_configured": False,
        }
        overall_healthy = False
    else:
        reachable = await supabase.health_check()
        dependencies["supabase"] = {
            "status": "healthy" if reachable else "unhealthy",
            "credentials_configured": True,
            "reachable": reachable,
        }
        if not reachable:
            overall_healthy = False

    status = "ready" if overall_healthy else "not_ready"

    if not overall_healthy:
        logger.warning("Readiness check failed", extra={"dependencies": dependencies})

    return JSONResponse(
        status_code=200 if overall_healthy else 503,
        content={
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "dependencies": dependencies,
        },
    )
