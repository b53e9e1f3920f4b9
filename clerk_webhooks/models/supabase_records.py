"""
Supabase Record Models

Pydantic models for rows written to the Supabase tables.
Timestamps are stored as ISO-8601 strings converted from Clerk's epoch
milliseconds.

A column is written only when the event carried its source key; a key sent
as ``null`` is written as null so cleared values reach the store.
"""

from datetime import datetime, timedelta
from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, Field

from clerk_webhooks.models.clerk_events import ClerkEventData

USERS_TABLE = "users"
ORGANIZATIONS_TABLE = "organizations"
OWNERS_TABLE = "owners"
MEMBERS_TABLE = "members"

TIMESTAMP_COLUMNS = ("created_at", "updated_at")

_EPOCH = datetime(1970, 1, 1)


def epoch_ms_to_iso(value: Optional[int]) -> Optional[str]:
    """
    Convert epoch milliseconds to an ISO-8601 UTC string.

    >>> epoch_ms_to_iso(0)
    '1970-01-01T00:00:00.000Z'
    """
    if value is None:
        return None
    moment = _EPOCH + timedelta(milliseconds=value)
    return moment.isoformat(timespec="milliseconds") + "Z"


def sent_value(model: Optional[BaseModel], path: Tuple[str, ...]) -> Tuple[bool, Any]:
    """
    Follow ``path`` through nested models.

    Returns:
        (sent, value) where ``sent`` is False when any key along the path was
        absent from the payload or a parent object was null
    """
    value: Any = model
    for key in path:
        if value is None or key not in value.model_fields_set:
            return False, None
        value = getattr(value, key)
    return True, value


def columns_from_event(
    data: ClerkEventData, sources: Dict[str, Tuple[str, ...]]
) -> Dict[str, Any]:
    """Map column name -> source path into the values the event carried"""
    values: Dict[str, Any] = {}
    for column, path in sources.items():
        sent, value = sent_value(data, path)
        if not sent:
            continue
        values[column] = epoch_ms_to_iso(value) if column in TIMESTAMP_COLUMNS else value
    return values


class SupabaseRecord(BaseModel):
    """Base class for rows sent to PostgREST"""

    # column -> path of the source field in the event data
    SOURCES: ClassVar[Dict[str, Tuple[str, ...]]] = {}

    @classmethod
    def from_event_data(cls, data: ClerkEventData):
        return cls(**columns_from_event(data, cls.SOURCES))

    def to_row(self) -> Dict[str, Any]:
        """Serialize for the store; columns the event did not carry are left out"""
        return self.model_dump(exclude_unset=True)


class UserRecord(SupabaseRecord):
    """users row created on user.created"""

    SOURCES = {
        "id": ("id",),
        "first_name": ("first_name",),
        "last_name": ("last_name",),
        "avatar_url": ("image_url",),
        "created_at": ("created_at",),
        "updated_at": ("updated_at",),
    }

    id: str = Field(description="Clerk user ID")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UserUpdate(SupabaseRecord):
    """users columns changed on user.updated"""

    SOURCES = {
        "first_name": ("first_name",),
        "last_name": ("last_name",),
        "avatar_url": ("image_url",),
        "updated_at": ("updated_at",),
    }

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: Optional[str] = None


class OrganizationRecord(SupabaseRecord):
    """organizations row created on organization.created"""

    SOURCES = {
        "id": ("id",),
        "name": ("name",),
        "updated_at": ("updated_at",),
    }

    id: str = Field(description="Clerk organization ID")
    name: Optional[str] = None
    updated_at: Optional[str] = None


class OwnerUpdate(SupabaseRecord):
    """owners columns changed on organization.updated"""

    SOURCES = {
        "name": ("name",),
        "updated_at": ("updated_at",),
    }

    name: Optional[str] = None
    updated_at: Optional[str] = None


class MemberRecord(SupabaseRecord):
    """members row created on organizationMembership.created"""

    SOURCES = {
        "id": ("id",),
        "user_id": ("public_user_data", "user_id"),
        "organization_id": ("organization", "id"),
        "created_at": ("created_at",),
        "updated_at": ("updated_at",),
    }

    id: str = Field(description="Clerk membership ID")
    user_id: Optional[str] = Field(None, description="Clerk user ID")
    organization_id: Optional[str] = Field(None, description="Clerk organization ID")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MemberUpdate(SupabaseRecord):
    """members columns changed on organizationMembership.updated"""

    SOURCES = {
        "user_id": ("public_user_data", "user_id"),
        "organization_id": ("organization", "id"),
        "updated_at": ("updated_at",),
    }

    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    updated_at: Optional[str] = None
