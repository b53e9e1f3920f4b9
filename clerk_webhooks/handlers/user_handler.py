"""
User Event Handler

Handles Clerk user lifecycle events by writing to the Supabase users table.
"""

from typing import Any, Dict

from clerk_webhooks.models.clerk_events import ClerkEvent
from clerk_webhooks.models.supabase_records import USERS_TABLE, UserRecord, UserUpdate
from clerk_webhooks.services.supabase_service import SupabaseService
from clerk_webhooks.utils.logging_config import LoggerLike


async def handle_user_created(
    event: ClerkEvent, supabase: SupabaseService, logger: LoggerLike
) -> Dict[str, Any]:
    """
    Handle user.created event.
    Inserts a new row into users keyed by the Clerk user ID.
    """
    record = UserRecord.from_event_data(event.data)

    logger.info("Creating user", extra={"user_id": record.id})

    user = await supabase.insert(USERS_TABLE, record.to_row())
    return {"user": user}


async def handle_user_updated(
    event: ClerkEvent, supabase: SupabaseService, logger: LoggerLike
) -> Dict[str, Any]:
    """
    Handle user.updated event.
    Updates names, avatar and updated_at of the matching users row.
    """
    user_id = event.data.id
    values = UserUpdate.from_event_data(event.data).to_row()

    logger.info("Updating user", extra={"user_id": user_id, "fields": sorted(values)})

    user = await supabase.update(USERS_TABLE, user_id, values)
    return {"user": user}
