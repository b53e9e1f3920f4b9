"""
Organization Membership Event Handler

Handles Clerk organizationMembership events by writing to the members table.
The member's user and organization IDs come from the nested
``public_user_data`` and ``organization`` objects, never from top-level fields.
"""

from typing import Any, Dict

from clerk_webhooks.models.clerk_events import ClerkEvent
from clerk_webhooks.models.supabase_records import MEMBERS_TABLE, MemberRecord, MemberUpdate
from clerk_webhooks.services.supabase_service import SupabaseService
from clerk_webhooks.utils.logging_config import LoggerLike


async def handle_membership_created(
    event: ClerkEvent, supabase: SupabaseService, logger: LoggerLike
) -> Dict[str, Any]:
    """Handle organizationMembership.created event"""
    record = MemberRecord.from_event_data(event.data)

    logger.info(
        "Creating member",
        extra={
            "membership_id": record.id,
            "user_id": record.user_id,
            "organization_id": record.organization_id,
        },
    )

    data = await supabase.insert(MEMBERS_TABLE, record.to_row())
    return {"data": data}


async def handle_membership_updated(
    event: ClerkEvent, supabase: SupabaseService, logger: LoggerLike
) -> Dict[str, Any]:
    """Handle organizationMembership.updated event"""
    membership_id = event.data.id
    values = MemberUpdate.from_event_data(event.data).to_row()

    logger.info("Updating member", extra={"membership_id": membership_id})

    data = await supabase.update(MEMBERS_TABLE, membership_id, values)
    return {"data": data}
