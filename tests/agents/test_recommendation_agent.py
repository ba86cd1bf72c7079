"""
Tests for the Gemini recommendation agent.

The google-genai client is always mocked: tests inject it through the
`client` argument or patch `_get_gemini_client`.
"""

import httpx
import pytest
from unittest.mock import MagicMock, patch
from google.genai import errors, types

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
from storefront.config import settings
from conftest import make_gemini_client, make_gemini_response


# =============================================================================
# fetch_recommendation_text
# =============================================================================

class TestFetchRecommendationText:

    @pytest.mark.asyncio
    async def test_sends_prompt_with_generation_config(self):
        client = make_gemini_client(text='  ["a"]  ')

        text = await fetch_recommendation_text("PROMPT", "key", client=client)

        assert text == '["a"]'
        call = client.aio.models.generate_content.call_args
        assert call.kwargs["model"] == settings.GEMINI_MODEL
        assert call.kwargs["contents"] == "PROMPT"
        config = call.kwargs["config"]
        assert config.temperature == 0.7
        assert config.top_k == 40
        assert config.top_p == 0.95
        assert config.max_output_tokens == 1024

    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", [None, ""])
    async def test_missing_key_raises_without_calling_model(self, api_key):
        client = make_gemini_client(text="[]")

        with pytest.raises(ConfigurationError) as exc_info:
            await fetch_recommendation_text("PROMPT", api_key, client=client)

        assert exc_info.value.message == "Gemini API key not configured"
        client.aio.models.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_api_error_becomes_upstream_error(self):
        api_error = errors.APIError(
            503,
            {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}},
        )
        client = make_gemini_client(side_effect=api_error)

        with pytest.raises(UpstreamError) as exc_info:
            await fetch_recommendation_text("PROMPT", "key", client=client)

        assert exc_info.value.upstream_status == 503
        assert exc_info.value.message.startswith("Gemini API error: 503")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_error_becomes_upstream_error(self):
        client = make_gemini_client(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(UpstreamError) as exc_info:
            await fetch_recommendation_text("PROMPT", "key", client=client)

        assert "connection refused" in exc_info.value.message
        assert exc_info.value.upstream_status is None

    @pytest.mark.asyncio
    async def test_no_candidates(self):
        client = make_gemini_client(response=types.GenerateContentResponse(candidates=[]))

        with pytest.raises(UpstreamError, match="no candidates"):
            await fetch_recommendation_text("PROMPT", "key", client=client)

    @pytest.mark.asyncio
    async def test_candidate_without_parts(self):
        response = types.GenerateContentResponse(
            candidates=[types.Candidate(content=types.Content(role="model", parts=[]))]
        )
        client = make_gemini_client(response=response)

        with pytest.raises(UpstreamError, match="no content parts"):
            await fetch_recommendation_text("PROMPT", "key", client=client)

    @pytest.mark.asyncio
    async def test_part_without_text(self):
        response = types.GenerateContentResponse(
            candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part()]))]
        )
        client = make_gemini_client(response=response)

        with pytest.raises(UpstreamError, match="no text"):
            await fetch_recommendation_text("PROMPT", "key", client=client)

    @pytest.mark.asyncio
    async def test_uses_cached_client_when_none_injected(self):
        client = make_gemini_client(text="[]")

        with patch(
            "storefront.agents.recommendation.agent._get_gemini_client",
            return_value=client,
        ) as get_client:
            await fetch_recommendation_text("PROMPT", "key-123")

        get_client.assert_called_once_with("key-123")
        client.aio.models.generate_content.assert_awaited_once()


# =============================================================================
# get_gemini_recommendations
# =============================================================================

class TestGetGeminiRecommendations:

    @pytest.mark.asyncio
    async def test_returns_parsed_handles(self, sample_products, gemini_ok_text):
        client = make_gemini_client(text=gemini_ok_text)

        handles = await get_gemini_recommendations(
            "key",
            {"currentProductTitle": "Red Shirt", "availableProducts": sample_products},
            client=client,
        )

        assert handles == ["red-shirt", "blue-jeans", "wool-scarf", "leather-belt"]
        prompt = client.aio.models.generate_content.call_args.kwargs["contents"]
        assert "Current Product: Red Shirt" in prompt
        assert "- Blue Jeans (blue-jeans): Slim fit denim" in prompt

    @pytest.mark.asyncio
    async def test_unparseable_output_raises_parse_error(self, sample_products):
        client = make_gemini_client(text="I would recommend the red shirt.")

        with pytest.raises(ParseError):
            await get_gemini_recommendations(
                "key", {"availableProducts": sample_products}, client=client
            )

    @pytest.mark.asyncio
    async def test_errors_share_base_class(self, sample_products):
        client = make_gemini_client(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(RecommendationError):
            await get_gemini_recommendations(
                "key", {"availableProducts": sample_products}, client=client
            )

    @pytest.mark.asyncio
    async def test_plain_coroutine_client(self, sample_products):
        client = MagicMock()
        response = make_gemini_response('["sun-hat"]')

        async def fake_generate_content(**kwargs):
            return response

        client.aio.models.generate_content = fake_generate_content

        handles = await get_gemini_recommendations(
            "key", {"availableProducts": sample_products}, client=client
        )
        assert handles == ["sun-hat"]
