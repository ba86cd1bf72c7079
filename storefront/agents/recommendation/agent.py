"""
Recommendation Agent Runner

Single-shot LLM workflow: one prompt, one Gemini call, one JSON array of
product handles parsed out of the response text.

Architecture:
- API: Google Gen AI Python SDK (google-genai), async surface (client.aio)
- Model: settings.GEMINI_MODEL
- Temperature: 0.7, top-k 40, top-p 0.95, max 1024 output tokens
- Retries: none, a failure surfaces immediately to the caller
- Output: JSON array parsed from free text (no response_schema)
"""

import logging
from typing import Any, List, Optional

import httpx
from google import genai
from google.genai import errors, types

from storefront.agents.recommendation.errors import ConfigurationError, UpstreamError
from storefront.agents.recommendation.parser import parse_recommendation_handles
from storefront.agents.recommendation.prompts import build_recommendation_prompt
from storefront.agents.recommendation.types import RecommendationContext
from storefront.config import settings
from storefront.utils.constants import (
    GENERATION_MAX_OUTPUT_TOKENS,
    GENERATION_TEMPERATURE,
    GENERATION_TOP_K,
    GENERATION_TOP_P,
)

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization, one per API key)
_gemini_client = None
_gemini_client_key: Optional[str] = None


def _get_gemini_client(api_key: str) -> genai.Client:
    """
    Lazy initialization of the Gemini client.
    Uses the Google Gen AI SDK.
    """
    global _gemini_client, _gemini_client_key

    if _gemini_client is not None and _gemini_client_key == api_key:
        return _gemini_client

    _gemini_client = genai.Client(api_key=api_key)
    _gemini_client_key = api_key
    logger.info("Gemini client initialized for recommendations")
    return _gemini_client


def _build_generation_config() -> types.GenerateContentConfig:
    """Generation parameters for recommendation calls."""
    return types.GenerateContentConfig(
        temperature=GENERATION_TEMPERATURE,
        top_k=GENERATION_TOP_K,
        top_p=GENERATION_TOP_P,
        max_output_tokens=GENERATION_MAX_OUTPUT_TOKENS,
    )


def _extract_response_text(response: Any) -> str:
    """
    Read candidates[0].content.parts[0].text from a Gemini response.

    Raises:
        UpstreamError: If any step of that path is missing
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        raise UpstreamError("Invalid response from Gemini API: no candidates")

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) if content is not None else None
    if not parts:
        raise UpstreamError("Invalid response from Gemini API: candidate has no content parts")

    text = getattr(parts[0], "text", None)
    if not isinstance(text, str):
        raise UpstreamError("Invalid response from Gemini API: first part has no text")

    return text.strip()


async def fetch_recommendation_text(
    prompt: str,
    api_key: Optional[str],
    client: Optional[genai.Client] = None,
) -> str:
    """
    Send the prompt to Gemini and return the raw response text.

    Args:
        prompt: Prompt built by build_recommendation_prompt
        api_key: Gemini API key (from settings.GEMINI_API_KEY in production)
        client: Optional pre-built client; tests inject a mock here

    Returns:
        Response text, stripped

    Raises:
        ConfigurationError: No API key supplied
        UpstreamError: Non-success status, transport failure or unexpected envelope
    """
    if not api_key:
        logger.error("GEMINI_API_KEY not configured")
        raise ConfigurationError()

    if client is None:
        client = _get_gemini_client(api_key)

    try:
        response = await client.aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt,
            config=_build_generation_config(),
        )
    except errors.APIError as e:
        raise UpstreamError(
            f"Gemini API error: {e.code} {e.status} - {e.details}",
            upstream_status=e.code,
        ) from e
    except httpx.HTTPError as e:
        raise UpstreamError(f"Gemini API request failed: {e}") from e

    return _extract_response_text(response)


async def get_gemini_recommendations(
    api_key: Optional[str],
    context: RecommendationContext,
    client: Optional[genai.Client] = None,
) -> List[str]:
    """
    Ask Gemini which of the available products to recommend.

    This function:
    1. Builds the prompt from the request context
    2. Makes one call to Gemini
    3. Parses the JSON array of handles out of the response text

    Args:
        api_key: Gemini API key
        context: Current product, shopper preference and candidates
        client: Optional injected Gemini client

    Returns:
        Ordered handles exactly as the model returned them (may include
        unknown handles and duplicates)

    Raises:
        ConfigurationError, UpstreamError, ParseError
    """
    available = context.get("availableProducts") or []
    logger.info(f"Requesting Gemini recommendations over {len(available)} candidate products")

    prompt = build_recommendation_prompt(context)

    try:
        text = await fetch_recommendation_text(prompt, api_key, client=client)
        handles = parse_recommendation_handles(text)
    except Exception as e:
        logger.error(f"Error getting Gemini recommendations: {e}")
        raise

    logger.info(f"Gemini returned {len(handles)} handles")
    return handles
