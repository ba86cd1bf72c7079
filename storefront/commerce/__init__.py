"""
Shopify Storefront API access (GraphQL over httpx).
"""

from storefront.commerce.client import (
    StorefrontAPIError,
    StorefrontClient,
    get_storefront_client,
)

__all__ = [
    "StorefrontAPIError",
    "StorefrontClient",
    "get_storefront_client",
]
