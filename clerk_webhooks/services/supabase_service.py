"""
Supabase REST API Service

Wrapper for the PostgREST interface of a Supabase project: single-row
inserts and id-keyed updates that return the affected row.
"""

from typing import Any, Dict, Optional

import httpx
from fastapi import Depends

from clerk_webhooks.config import Settings, get_settings
from clerk_webhooks.utils.exceptions import SupabaseAPIException
from clerk_webhooks.utils.logging_config import get_logger

logger = get_logger(__name__)

# Ask PostgREST for a single JSON object instead of an array; anything other
# than exactly one affected row then comes back as an error (PGRST116).
SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class SupabaseService:
    """
    Service for writing rows through the Supabase REST API.

    Authenticates with the service role key, so row level security does
    not apply to the webhook writes.
    """

    def __init__(
        self,
        url: str,
        service_role_key: str,
        schema: str = "public",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.service_role_key = service_role_key
        self.schema = schema
        self.timeout = timeout
        self._transport = transport

    @property
    def rest_url(self) -> str:
        return f"{self.url}/rest/v1"

    def _get_http_client(self) -> httpx.AsyncClient:
        """
        Create an httpx AsyncClient.
        A fresh client per call keeps requests independent of each other.
        """
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
            "Content-Type": "application/json",
            "Accept": SINGLE_OBJECT,
            "Accept-Profile": self.schema,
            "Content-Profile": self.schema,
            "Prefer": "return=representation",
        }

    async def _request(
        self,
        method: str,
        table: str,
        json_data: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make an authenticated request against a table endpoint.

        Args:
            method: HTTP method (POST, PATCH)
            table: Table name
            json_data: Optional JSON body
            params: Optional PostgREST filters

        Returns:
            The affected row

        Raises:
            SupabaseAPIException: If the request fails or PostgREST reports an error
        """
        url = f"{self.rest_url}/{table}"

        async with self._get_http_client() as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    json=json_data,
                    params=params,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error calling Supabase: {e}")
                raise SupabaseAPIException(
                    f"Network error: {e}",
                    details={"error": str(e), "table": table},
                ) from e

        if response.status_code >= 400:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {"message": response.text}
            if not isinstance(error_data, dict):
                error_data = {"message": str(error_data)}

            message = error_data.get("message") or response.text or response.reason_phrase

            logger.error(
                f"Supabase API error: {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "table": table,
                    "error": error_data,
                },
            )

            raise SupabaseAPIException(
                message,
                status_code=response.status_code,
                details={
                    "table": table,
                    "code": error_data.get("code"),
                    "details": error_data.get("details"),
                    "hint": error_data.get("hint"),
                },
            )

        return response.json()

    async def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one row and return it.

        Args:
            table: Table name
            record: Column values including the primary key

        Returns:
            The inserted row as stored

        Raises:
            SupabaseAPIException: On constraint violations (e.g. duplicate id) or other errors
        """
        row = await self._request("POST", table, json_data=[record])
        logger.debug(f"Inserted row into {table}", extra={"table": table, "id": record.get("id")})
        return row

    async def update(
        self, table: str, record_id: str, values: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Update the row whose ``id`` equals ``record_id`` and return it.

        Raises:
            SupabaseAPIException: If no single row matches or the update fails
        """
        row = await self._request(
            "PATCH",
            table,
            json_data=values,
            params={"id": f"eq.{record_id}"},
        )
        logger.debug(f"Updated row in {table}", extra={"table": table, "id": record_id})
        return row

    async def health_check(self) -> bool:
        """Check that the REST endpoint answers with the configured key"""
        headers = {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }
        async with self._get_http_client() as client:
            try:
                response = await client.get(f"{self.rest_url}/", headers=headers)
            except httpx.RequestError as e:
                logger.warning(f"Supabase health check failed: {e}")
                return False
        return response.status_code < 500


def get_supabase_service(
    settings: Settings = Depends(get_settings),
) -> Optional[SupabaseService]:
    """
    Build the Supabase service for a request.

    Returns None when the Supabase credentials are not configured.
    """
    if not settings.has_supabase_credentials:
        return None
    return SupabaseService(
        url=settings.supabase_url,
        service_role_key=settings.supabase_service_role_key,
        schema=settings.supabase_schema,
        timeout=settings.supabase_timeout,
    )
