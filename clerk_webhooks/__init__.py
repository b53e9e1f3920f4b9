"""
Clerk Webhooks Sync Service

Receives Clerk identity webhooks (users, organizations, memberships),
verifies their Svix signatures and mirrors them into Supabase tables.
"""

__version__ = "1.0.0"
