"""
Organization Event Handler

Handles Clerk organization lifecycle events.

Note: organization.created writes to ``organizations`` while
organization.updated writes to ``owners``. Both tables are kept as deployed;
do not merge them without migrating the data.
"""

from typing import Any, Dict

from clerk_webhooks.models.clerk_events import ClerkEvent
from clerk_webhooks.models.supabase_records import (
    ORGANIZATIONS_TABLE,
    OWNERS_TABLE,
    OrganizationRecord,
    OwnerUpdate,
)
from clerk_webhooks.services.supabase_service import SupabaseService
from clerk_webhooks.utils.logging_config import LoggerLike


async def handle_organization_created(
    event: ClerkEvent, supabase: SupabaseService, logger: LoggerLike
) -> Dict[str, Any]:
    """Handle organization.created event by inserting into organizations"""
    record = OrganizationRecord.from_event_data(event.data)

    logger.info("Creating organization", extra={"organization_id": record.id})

    data = await supabase.insert(ORGANIZATIONS_TABLE, record.to_row())
    return {"data": data}


async def handle_organization_updated(
    event: ClerkEvent, supabase: SupabaseService, logger: LoggerLike
) -> Dict[str, Any]:
    """Handle organization.updated event by updating the owners row"""
    organization_id = event.data.id
    values = OwnerUpdate.from_event_data(event.data).to_row()

    logger.info("Updating owner", extra={"organization_id": organization_id})

    data = await supabase.update(OWNERS_TABLE, organization_id, values)
    return {"data": data}
