"""
Recommendation Agent - single-shot Gemini product picker

This package contains the prompt builder, the Gemini runner and the response
parser for storefront product recommendations.

Architecture:
- Pattern: single LLM call choosing handles from a supplied candidate list
- Model: Gemini (settings.GEMINI_MODEL), temperature 0.7
- Output: JSON array of product handles parsed from text

The service layer (matching, fallback merging) is in:
- storefront/services/recommendation_service.py
"""

from storefront.agents.recommendation.agent import (
    fetch_recommendation_text,
    get_gemini_recommendations,
)
from storefront.agents.recommendation.errors import (
    ConfigurationError,
    ParseError,
    RecommendationError,
    UpstreamError,
)
from storefront.agents.recommendation.parser import parse_recommendation_handles
from storefront.agents.recommendation.prompts import build_recommendation_prompt

__all__ = [
    "build_recommendation_prompt",
    "fetch_recommendation_text",
    "get_gemini_recommendations",
    "parse_recommendation_handles",
    "RecommendationError",
    "ConfigurationError",
    "UpstreamError",
    "ParseError",
]
