"""Event handlers for the routed Clerk event types"""

from clerk_webhooks.handlers import membership_handler, organization_handler, user_handler

__all__ = [
    "user_handler",
    "organization_handler",
    "membership_handler",
]
