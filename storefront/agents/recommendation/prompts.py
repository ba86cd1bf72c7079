"""
Recommendation Prompt Templates

Builds the single user prompt sent to Gemini for storefront recommendations.

Prompt structure (in order):
1. Fixed role/instruction preamble
2. Current product title and description (description truncated to 300 chars)
3. Shopper preference (free text), when present
4. Up to 20 candidate products as "- Title (handle): description[:100]"
5. Fixed closing instruction demanding a bare JSON array of 4-6 handles

The output format is enforced by instruction only; the parser tolerates the
model wrapping the array in prose or markdown fences.
"""

from typing import Any, Dict, List

from storefront.agents.recommendation.types import RecommendationContext
from storefront.utils.constants import (
    CANDIDATE_DESCRIPTION_MAX_CHARS,
    CURRENT_DESCRIPTION_MAX_CHARS,
    MAX_PROMPT_PRODUCTS,
)

RECOMMENDATION_PREAMBLE = (
    "You are an AI shopping assistant. Analyze the following products "
    "and provide personalized recommendations.\n\n"
)

RECOMMENDATION_CLOSING_INSTRUCTIONS = (
    "Based on the context above, recommend 4-6 products that would be most relevant. "
    "Return ONLY a JSON array of product handles (the handle is the URL-friendly "
    "identifier in parentheses), like this: "
    '["product-handle-1", "product-handle-2", "product-handle-3", "product-handle-4"]\n'
    "Do not include any explanation, only the JSON array."
)


def format_candidate_line(product: Dict[str, Any]) -> str:
    """Render one candidate product as a prompt bullet."""
    title = product.get("title") or ""
    handle = product.get("handle") or ""
    description = product.get("description") or ""

    line = f"- {title} ({handle})"
    if description:
        line += f": {description[:CANDIDATE_DESCRIPTION_MAX_CHARS]}"
    return line


def format_candidate_list(products: List[Dict[str, Any]]) -> str:
    """Render the first MAX_PROMPT_PRODUCTS candidates, one per line."""
    return "\n".join(
        format_candidate_line(product) for product in products[:MAX_PROMPT_PRODUCTS]
    )


def build_recommendation_prompt(context: RecommendationContext) -> str:
    """
    Build the recommendation prompt for Gemini.

    Args:
        context: Current product, shopper preference and candidate products

    Returns:
        str: Prompt text; identical input always yields identical output
    """
    current_title = context.get("currentProductTitle")
    current_description = context.get("currentProductDescription")
    user_query = context.get("userQuery")
    products = context.get("availableProducts") or []

    prompt = RECOMMENDATION_PREAMBLE

    if current_title:
        prompt += f"Current Product: {current_title}\n"
        if current_description:
            prompt += (
                f"Description: {current_description[:CURRENT_DESCRIPTION_MAX_CHARS]}\n\n"
            )

    if user_query:
        prompt += f"User Preference: {user_query}\n\n"

    prompt += f"Available Products:\n{format_candidate_list(products)}\n\n"
    prompt += RECOMMENDATION_CLOSING_INSTRUCTIONS

    return prompt
