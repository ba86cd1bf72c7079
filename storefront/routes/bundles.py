"""
Bundle merchandising API endpoints.

Bundles are Shopify metaobjects of type "bundle" whose fields describe the
offer (title, description, image, bundle_type, discount_value) and reference
the bundled products.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from storefront.commerce.client import StorefrontAPIError, StorefrontClient, get_storefront_client
from storefront.schemas.bundles import BundleDetailResponse, BundleListResponse
from storefront.services.bundle_service import get_bundle_by_handle, list_bundles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bundles", tags=["bundles"])


def _storefront_failure(e: StorefrontAPIError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "error": "storefront_error",
            "details": e.message,
        }
    )


@router.get(
    "",
    response_model=BundleListResponse,
    status_code=status.HTTP_200_OK,
    summary="List bundles",
    description="""
    Bundle index cards (first 20 bundles).

    Each card carries a default title when the bundle has none, the
    description as plain text, and badge/offer labels derived from
    bundle_type and discount_value.
    """
)
async def list_bundles_endpoint(
    client: Annotated[StorefrontClient, Depends(get_storefront_client)],
) -> BundleListResponse:
    """List bundles for the index page."""
    try:
        bundles = await list_bundles(client)
    except StorefrontAPIError as e:
        logger.error(f"Failed to list bundles: {e.message}")
        raise _storefront_failure(e)

    return BundleListResponse(bundles=bundles, count=len(bundles))


@router.get(
    "/{handle}",
    response_model=BundleDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get bundle by handle",
    description="""
    Bundle detail page payload: flattened fields, bundled products with their
    first variant, pricing and ready-to-submit cart lines.

    Pricing:
    - fixed_price: bundle price is discount_value
    - percentage: discount_value percent off the items total
    - otherwise: items total

    Returns 404 when no bundle has this handle.
    """
)
async def get_bundle_endpoint(
    client: Annotated[StorefrontClient, Depends(get_storefront_client)],
    handle: str = Path(..., description="Bundle metaobject handle"),
) -> BundleDetailResponse:
    """Get a single bundle."""
    try:
        detail = await get_bundle_by_handle(client, handle)
    except StorefrontAPIError as e:
        logger.error(f"Failed to load bundle handle='{handle}': {e.message}")
        raise _storefront_failure(e)

    if detail is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bundle not found"
        )

    return BundleDetailResponse(**detail)
