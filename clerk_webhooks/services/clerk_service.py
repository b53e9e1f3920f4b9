"""
Clerk Service

Handles Svix header extraction, webhook signature verification and event
validation for Clerk webhooks.
"""

import json
from typing import Any, Dict, NamedTuple, Optional

from fastapi import Request
from pydantic import ValidationError
from svix.webhooks import Webhook, WebhookVerificationError

from clerk_webhooks.models.clerk_events import ClerkEvent
from clerk_webhooks.utils.exceptions import (
    ClerkException,
    ClerkSignatureException,
    ConfigurationException,
)
from clerk_webhooks.utils.logging_config import get_logger

logger = get_logger(__name__)

SVIX_ID_HEADER = "svix-id"
SVIX_TIMESTAMP_HEADER = "svix-timestamp"
SVIX_SIGNATURE_HEADER = "svix-signature"


class SvixHeaders(NamedTuple):
    """The three headers Svix attaches to every delivery"""

    svix_id: str
    svix_timestamp: str
    svix_signature: str

    def as_dict(self) -> Dict[str, str]:
        return {
            SVIX_ID_HEADER: self.svix_id,
            SVIX_TIMESTAMP_HEADER: self.svix_timestamp,
            SVIX_SIGNATURE_HEADER: self.svix_signature,
        }


class ClerkService:
    """Clerk webhook service"""

    def extract_svix_headers(self, request: Request) -> Optional[SvixHeaders]:
        """
        Extract the Svix headers from the request.

        Returns:
            SvixHeaders, or None when any of the three is missing or empty
        """
        svix_id = request.headers.get(SVIX_ID_HEADER)
        svix_timestamp = request.headers.get(SVIX_TIMESTAMP_HEADER)
        svix_signature = request.headers.get(SVIX_SIGNATURE_HEADER)

        if not svix_id or not svix_timestamp or not svix_signature:
            return None

        return SvixHeaders(svix_id, svix_timestamp, svix_signature)

    def verify_webhook_signature(
        self,
        secret: str,
        payload: bytes,
        headers: SvixHeaders,
    ) -> Dict[str, Any]:
        """
        Verify the Svix signature of a webhook payload.

        Args:
            secret: Svix signing secret (``whsec_...``)
            payload: Raw request body as bytes
            headers: Svix headers of the request

        Returns:
            The decoded JSON payload

        Raises:
            ClerkSignatureException: If signature verification fails
            ClerkException: If the payload cannot be decoded
            ConfigurationException: If the secret is not a valid signing secret
        """
        try:
            webhook = Webhook(secret)
        except ValueError as e:
            raise ConfigurationException(
                "Webhook secret is not a valid Svix signing secret",
                details={"error": str(e)},
            ) from e

        try:
            webhook.verify(payload, headers.as_dict())
        except WebhookVerificationError as e:
            logger.error(
                f"Svix signature verification failed: {e}",
                extra={"svix_id": headers.svix_id, "error": str(e)},
            )
            raise ClerkSignatureException("Invalid Clerk webhook signature") from e
        except ValueError as e:
            logger.error(f"Invalid webhook payload: {e}")
            raise ClerkException(
                "Invalid webhook payload",
                details={"error": str(e)},
            ) from e

        logger.info(
            "Webhook signature verified successfully",
            extra={"svix_id": headers.svix_id},
        )
        return self.decode_payload(payload)

    def decode_payload(self, payload: bytes) -> Dict[str, Any]:
        """Decode an unverified JSON payload"""
        try:
            return json.loads(payload)
        except ValueError as e:
            logger.error(f"Invalid webhook payload: {e}")
            raise ClerkException(
                "Invalid webhook payload",
                details={"error": str(e)},
            ) from e

    def parse_event(self, payload: Any) -> ClerkEvent:
        """
        Validate a decoded payload into a ClerkEvent.

        Raises:
            ClerkException: If the payload is not a Clerk event envelope
        """
        try:
            return ClerkEvent.model_validate(payload)
        except ValidationError as e:
            logger.error(
                "Webhook payload failed validation",
                extra={"errors": e.errors(include_url=False, include_input=False)},
            )
            raise ClerkException(
                "Invalid webhook payload",
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e


# Global Clerk service instance
clerk_service = ClerkService()
