"""
Shopify Storefront API client.

Thin async GraphQL client over httpx. One client is created per request by
the `get_storefront_client` dependency and closed when the request ends;
tests inject an `httpx.AsyncClient` backed by `httpx.MockTransport`.

SECURITY RULES:
1. The Storefront access token is public-scope but still never logged
2. Only read queries are issued (no cart or checkout mutations)
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from storefront.config import settings

logger = logging.getLogger(__name__)


class StorefrontAPIError(Exception):
    """Raised when the Storefront API call fails or returns GraphQL errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class StorefrontClient:
    """Execute Storefront GraphQL queries for one shop."""

    def __init__(
        self,
        domain: str,
        access_token: str,
        api_version: str = "2025-01",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.domain = domain
        self.access_token = access_token
        self.api_version = api_version
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def endpoint(self) -> str:
        return f"https://{self.domain}/api/{self.api_version}/graphql.json"

    async def query(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query and return its `data` object.

        Raises:
            StorefrontAPIError: Transport failure, non-2xx status, GraphQL
                errors or a response without `data`
        """
        try:
            response = await self.http_client.post(
                self.endpoint,
                json={"query": document, "variables": variables or {}},
                headers={
                    "X-Shopify-Storefront-Access-Token": self.access_token,
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Storefront API request failed: {e}")
            raise StorefrontAPIError(f"Storefront API request failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Storefront API returned HTTP {response.status_code}")
            raise StorefrontAPIError(
                f"Storefront API error: {response.status_code} - {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise StorefrontAPIError(
                "Storefront API returned a non-JSON body",
                status_code=response.status_code,
            ) from e

        if not isinstance(payload, dict):
            raise StorefrontAPIError(
                "Storefront API returned an unexpected body",
                status_code=response.status_code,
            )

        if payload.get("errors"):
            errors = payload["errors"]
            messages = "; ".join(str(err.get("message", err)) for err in errors)
            logger.error(f"Storefront GraphQL errors: {messages}")
            raise StorefrontAPIError(
                f"Storefront GraphQL error: {messages}",
                status_code=response.status_code,
                errors=errors,
            )

        data = payload.get("data")
        if data is None:
            raise StorefrontAPIError(
                "Storefront API response has no data",
                status_code=response.status_code,
            )

        return data

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()


async def get_storefront_client() -> AsyncIterator[StorefrontClient]:
    """
    FastAPI dependency yielding a Storefront client built from settings.

    The client lives for one request.
    """
    client = StorefrontClient(
        domain=settings.PUBLIC_STORE_DOMAIN,
        access_token=settings.PUBLIC_STOREFRONT_API_TOKEN,
        api_version=settings.STOREFRONT_API_VERSION,
        timeout=settings.STOREFRONT_TIMEOUT_SECONDS,
    )
    try:
        yield client
    finally:
        await client.aclose()
