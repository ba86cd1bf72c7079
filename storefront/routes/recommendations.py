"""
FastAPI routes for AI-powered product recommendations (Gemini).

Endpoints:
- POST /api/recommendations: handles chosen by Gemini for the given products
- GET  /api/recommendations: informational message
- POST /api/recommendations/products: widget pipeline, handles resolved to
  products and padded with fallback products (never fails on AI errors)

Any other method on /api/recommendations gets 405 with an `error` payload.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from storefront.agents.recommendation.errors import ConfigurationError, RecommendationError
from storefront.config import settings
from storefront.schemas.recommendations import (
    ProductRecommendationRequest,
    ProductRecommendationResponse,
    RecommendationErrorResponse,
    RecommendationInfoResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from storefront.services.recommendation_service import (
    get_recommendations_with_fallback,
    query_recommendation_handles,
)

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/api/recommendations",
    tags=["recommendations"]
)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "",
    response_model=RecommendationResponse,
    status_code=200,
    responses={
        500: {"model": RecommendationErrorResponse, "description": "Missing API key or Gemini failure"},
    },
    summary="Get AI product recommendations",
    description="""
    Asks Gemini to pick 4-6 of the supplied products for the shopper.

    **Flow:**
    1. Build the prompt from current product, preference and candidates
    2. Single Gemini call (no retries)
    3. Parse the JSON array of handles from the response text

    Handles are returned exactly as the model produced them; resolving them
    to products is the caller's job (or use /api/recommendations/products).
    """
)
async def get_recommendations_endpoint(request: RecommendationRequest):
    """
    Recommendation handles endpoint.

    - Missing GEMINI_API_KEY -> 500 {"error": "Gemini API key not configured"}
    - Gemini or parse failure -> 500 {"error": <message>}
    """
    logger.info(
        f"POST /api/recommendations called with {len(request.available_products)} products, "
        f"current_product={'yes' if request.current_product_title else 'no'}"
    )

    api_key = settings.GEMINI_API_KEY
    if not api_key:
        logger.error("Gemini API key not configured")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": ConfigurationError().message},
        )

    try:
        handles = await query_recommendation_handles(api_key, request.to_context())
    except RecommendationError as e:
        logger.error(f"Error in recommendations API: {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message or "Failed to get recommendations"},
        )

    logger.info(f"Returning {len(handles)} recommendation handles")
    return RecommendationResponse(recommendations=handles)


@router.get(
    "",
    response_model=RecommendationInfoResponse,
    status_code=200,
    summary="Recommendations endpoint info",
)
async def recommendations_info() -> RecommendationInfoResponse:
    """GET is informational only."""
    return RecommendationInfoResponse(message="Use POST to get recommendations")


@router.api_route(
    "",
    methods=["PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=RecommendationErrorResponse,
    include_in_schema=False,
)
async def recommendations_method_not_allowed() -> JSONResponse:
    """Reject every method other than GET and POST."""
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
    )


@router.post(
    "/products",
    response_model=ProductRecommendationResponse,
    response_model_exclude_none=True,
    status_code=200,
    summary="Get recommended products with fallback",
    description="""
    Full widget pipeline: Gemini handles are matched to the available
    products (verbatim, hyphenless, or slugified), capped at 6, and padded
    with fallback products when fewer than 4 matched.

    Missing configuration, Gemini failures and unparseable output never
    surface as errors here: the first 6 fallback products are returned with
    `error` and `advisory` set.
    """
)
async def get_recommended_products_endpoint(
    request: ProductRecommendationRequest,
) -> ProductRecommendationResponse:
    """Widget recommendation endpoint."""
    logger.info(
        f"POST /api/recommendations/products called with "
        f"{len(request.available_products)} products, "
        f"{len(request.fallback_products)} fallback products"
    )

    outcome = await get_recommendations_with_fallback(
        settings.GEMINI_API_KEY,
        request.to_context(),
        [product.to_payload() for product in request.fallback_products],
    )

    return ProductRecommendationResponse(
        products=outcome.products,
        error=outcome.error,
        advisory=outcome.advisory,
    )
