"""
Recommendation Service - Gemini handles mapped back onto catalogue products

This service turns the handle list produced by the recommendation agent into
the product cards the storefront renders.

Pipeline:
1. Agent: prompt -> Gemini -> JSON array of handles
2. Matching: each handle resolved against the available products
   (verbatim, hyphens stripped, or "Title Case Words" slugified)
3. Merging: sparse results padded from the caller's fallback list
4. Boundary: configuration, upstream and parse failures degrade to the
   fallback list with an advisory message instead of an error page

The final list always has at most 6 products, no handle twice, AI picks
before fallback picks.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from google import genai

from storefront.agents.recommendation.agent import get_gemini_recommendations
from storefront.agents.recommendation.errors import RecommendationError
from storefront.agents.recommendation.types import RecommendationContext
from storefront.utils.constants import MAX_RECOMMENDATIONS, MIN_RECOMMENDATIONS

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

ADVISORY_FALLBACK_ONLY = "Unable to load AI recommendations. Showing popular products instead."
ADVISORY_PARTIAL = "Some recommendations may be AI-powered"


@dataclass
class RecommendationOutcome:
    """Result of the full recommendation pipeline."""
    products: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    advisory: Optional[str] = None


def _handle_variants(token: str) -> List[str]:
    """The three encodings a model-returned token may use for a stored handle."""
    return [
        token,
        token.replace("-", ""),
        _WHITESPACE_RE.sub("-", token).lower(),
    ]


def _handle_matches(handle: Any, token: str, candidates: List[str]) -> bool:
    """A stored handle matches when it equals an encoding, or its hyphenless form equals the token."""
    if not isinstance(handle, str):
        return False
    return handle in candidates or handle.replace("-", "") == token


def match_recommended_products(
    handles: Sequence[Any],
    available_products: Sequence[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Resolve model handles to available products.

    For each token the first product whose handle matches any of the token's
    encodings wins; a hyphenless token ("redshirt") also finds the hyphenated
    handle ("red-shirt"). Unmatched tokens are dropped. The result follows
    token order, is capped at MAX_RECOMMENDATIONS and is NOT deduplicated.
    """
    matched: List[Dict[str, Any]] = []

    for token in handles:
        if not isinstance(token, str):
            continue

        candidates = _handle_variants(token)
        product = next(
            (p for p in available_products if _handle_matches(p.get("handle"), token, candidates)),
            None,
        )
        if product is None:
            logger.debug(f"No available product for handle '{token}'")
            continue

        matched.append(product)

    return matched[:MAX_RECOMMENDATIONS]


def merge_with_fallback(
    matched: Sequence[Dict[str, Any]],
    fallback: Sequence[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Pad a sparse matched list with fallback products.

    - Nothing matched: the first 6 fallback products, as given.
    - Repeated handles in the matched list are kept once.
    - Fewer than 4 matches: fallback products with unseen handles are
      appended in order until 6 products or the fallback list runs out.
    - 4 or more matches: no fallback products are added.
    """
    if not matched:
        return list(fallback[:MAX_RECOMMENDATIONS])

    merged: List[Dict[str, Any]] = []
    used_handles = set()

    for product in matched:
        handle = product.get("handle")
        if handle in used_handles:
            continue
        used_handles.add(handle)
        merged.append(product)

    if len(matched) < MIN_RECOMMENDATIONS and fallback:
        for product in fallback:
            if len(merged) >= MAX_RECOMMENDATIONS:
                break
            handle = product.get("handle")
            if handle in used_handles:
                continue
            used_handles.add(handle)
            merged.append(product)

    return merged[:MAX_RECOMMENDATIONS]


async def query_recommendation_handles(
    api_key: Optional[str],
    context: RecommendationContext,
    client: Optional[genai.Client] = None,
) -> List[str]:
    """
    Return the raw handle list for the recommendations API endpoint.

    Errors from the agent propagate; the route maps them to HTTP 500.
    """
    return await get_gemini_recommendations(api_key, context, client=client)


async def get_recommendations_with_fallback(
    api_key: Optional[str],
    context: RecommendationContext,
    fallback_products: Optional[Sequence[Dict[str, Any]]] = None,
    client: Optional[genai.Client] = None,
) -> RecommendationOutcome:
    """
    Run the whole recommendation pipeline and never raise pipeline errors.

    Args:
        api_key: Gemini API key
        context: Current product, shopper preference and candidates
        fallback_products: Products shown when the model result is sparse or fails
        client: Optional injected Gemini client

    Returns:
        RecommendationOutcome with the products to render, plus error and
        advisory text when the AI path failed
    """
    fallback = list(fallback_products or [])
    available = context.get("availableProducts") or []

    if not available:
        logger.info("No available products supplied, returning fallback products")
        return RecommendationOutcome(products=fallback[:MAX_RECOMMENDATIONS])

    try:
        handles = await get_gemini_recommendations(api_key, context, client=client)
    except RecommendationError as e:
        logger.warning(f"Falling back to default recommendations: {e.message}")
        products = fallback[:MAX_RECOMMENDATIONS]
        return RecommendationOutcome(
            products=products,
            error=e.message,
            advisory=ADVISORY_PARTIAL if products else ADVISORY_FALLBACK_ONLY,
        )

    matched = match_recommended_products(handles, available)
    products = merge_with_fallback(matched, fallback)

    logger.info(
        f"Matched {len(matched)} of {len(handles)} handles, "
        f"returning {len(products)} products"
    )

    return RecommendationOutcome(products=products)
