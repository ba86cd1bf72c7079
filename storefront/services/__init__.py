"""
Service layer for the storefront backend.

Contains business logic orchestration that:
- Adapts endpoint requests to agent and Storefront API calls
- Maps agent and GraphQL output into plain response payloads
- Owns the degrade-to-fallback policy for recommendations

Services act as the glue between routes (HTTP layer) and agents/commerce.
"""

from .bundle_service import (
    build_bundle_cart_lines,
    calculate_bundle_pricing,
    collect_products,
    format_bundle_fields,
    format_image_reference,
    get_bundle_by_handle,
    list_bundles,
)
from .recommendation_service import (
    RecommendationOutcome,
    get_recommendations_with_fallback,
    match_recommended_products,
    merge_with_fallback,
    query_recommendation_handles,
)

__all__ = [
    "build_bundle_cart_lines",
    "calculate_bundle_pricing",
    "collect_products",
    "format_bundle_fields",
    "format_image_reference",
    "get_bundle_by_handle",
    "list_bundles",
    "RecommendationOutcome",
    "get_recommendations_with_fallback",
    "match_recommended_products",
    "merge_with_fallback",
    "query_recommendation_handles",
]
