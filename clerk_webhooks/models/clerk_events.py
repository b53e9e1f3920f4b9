"""
Clerk Event Models

Pydantic models for Clerk webhook events validation.
Clerk payloads are loosely typed: only ``data.id`` is guaranteed, every other
field is optional and unknown fields are kept.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

_EPOCH = datetime(1970, 1, 1)
_MS = timedelta(milliseconds=1)

# Epoch milliseconds that still convert to a datetime (years 1 to 9999)
MIN_EPOCH_MS = (datetime.min - _EPOCH) // _MS
MAX_EPOCH_MS = (datetime.max - _EPOCH) // _MS


class ClerkEventType(str, Enum):
    """Event types routed to a Supabase write"""

    USER_CREATED = "user.created"
    USER_UPDATED = "user.updated"
    ORGANIZATION_CREATED = "organization.created"
    ORGANIZATION_UPDATED = "organization.updated"
    ORGANIZATION_MEMBERSHIP_CREATED = "organizationMembership.created"
    ORGANIZATION_MEMBERSHIP_UPDATED = "organizationMembership.updated"


class ClerkEmailVerification(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None


class ClerkEmailAddress(BaseModel):
    """Entry of a user's ``email_addresses`` list"""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    email_address: Optional[str] = None
    verification: Optional[ClerkEmailVerification] = None


class ClerkOrganization(BaseModel):
    """Organization embedded in membership events"""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Clerk organization ID")
    name: Optional[str] = None
    created_at: Optional[int] = Field(None, description="Epoch milliseconds")
    updated_at: Optional[int] = Field(None, description="Epoch milliseconds")


class ClerkPublicUserData(BaseModel):
    """Public user data embedded in membership events"""

    model_config = ConfigDict(extra="allow")

    user_id: Optional[str] = Field(None, description="Clerk user ID")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    email_address: Optional[str] = None


class ClerkEventData(BaseModel):
    """Clerk event payload (user, organization or membership object)"""

    model_config = ConfigDict(extra="allow")

    id: str = Field(description="Clerk object ID")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = None
    email_addresses: Optional[List[ClerkEmailAddress]] = None
    primary_email_address_id: Optional[str] = None
    public_metadata: Optional[Dict[str, Any]] = None
    unsafe_metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[int] = Field(
        None, ge=MIN_EPOCH_MS, le=MAX_EPOCH_MS, description="Epoch milliseconds"
    )
    updated_at: Optional[int] = Field(
        None, ge=MIN_EPOCH_MS, le=MAX_EPOCH_MS, description="Epoch milliseconds"
    )
    organization: Optional[ClerkOrganization] = None
    public_user_data: Optional[ClerkPublicUserData] = None


class ClerkEvent(BaseModel):
    """
    Clerk webhook event model.
    Represents the complete webhook payload delivered through Svix.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Event type (e.g., user.created)")
    data: ClerkEventData = Field(description="Event data")
    object: Optional[str] = Field("event")
    timestamp: Optional[int] = Field(None, description="Epoch milliseconds")
    instance_id: Optional[str] = None

    @property
    def event_type_category(self) -> str:
        """Get the event category (e.g., 'user' from 'user.created')"""
        return self.type.split(".")[0] if "." in self.type else self.type

    @property
    def event_action(self) -> str:
        """Get the event action (e.g., 'created' from 'user.created')"""
        parts = self.type.split(".")
        return parts[-1] if len(parts) > 1 else ""
