"""
Tests for the recommendation prompt builder.
"""

import pytest

from storefront.agents.recommendation.prompts import (
    RECOMMENDATION_CLOSING_INSTRUCTIONS,
    RECOMMENDATION_PREAMBLE,
    build_recommendation_prompt,
    format_candidate_line,
)
from conftest import make_product


class TestPromptBuilding:
    """Tests for build_recommendation_prompt."""

    def test_prompt_starts_with_preamble_and_ends_with_instructions(self, sample_products):
        prompt = build_recommendation_prompt({"availableProducts": sample_products})
        assert prompt.startswith(RECOMMENDATION_PREAMBLE)
        assert prompt.endswith("Do not include any explanation, only the JSON array.")
        assert RECOMMENDATION_CLOSING_INSTRUCTIONS in prompt

    def test_prompt_section_order(self, sample_products):
        prompt = build_recommendation_prompt({
            "currentProductTitle": "Red Shirt",
            "currentProductDescription": "Bright red",
            "userQuery": "casual summer look",
            "availableProducts": sample_products,
        })
        positions = [
            prompt.index("Current Product: Red Shirt"),
            prompt.index("Description: Bright red"),
            prompt.index("User Preference: casual summer look"),
            prompt.index("Available Products:"),
            prompt.index("recommend 4-6 products"),
        ]
        assert positions == sorted(positions)

    def test_current_description_truncated_to_300(self):
        description = "x" * 500
        prompt = build_recommendation_prompt({
            "currentProductTitle": "Thing",
            "currentProductDescription": description,
            "availableProducts": [],
        })
        assert f"Description: {'x' * 300}\n" in prompt
        assert "x" * 301 not in prompt

    def test_description_requires_current_title(self):
        prompt = build_recommendation_prompt({
            "currentProductDescription": "orphan description",
            "availableProducts": [],
        })
        assert "orphan description" not in prompt
        assert "Current Product" not in prompt

    def test_user_query_optional(self, sample_products):
        prompt = build_recommendation_prompt({"availableProducts": sample_products})
        assert "User Preference" not in prompt

    def test_candidate_list_limited_to_20(self):
        products = [make_product(f"product-{i}") for i in range(30)]
        prompt = build_recommendation_prompt({"availableProducts": products})
        assert "(product-19)" in prompt
        assert "(product-20)" not in prompt

    def test_candidate_description_truncated_to_100(self):
        product = make_product("long", description="y" * 250)
        line = format_candidate_line(product)
        assert line == f"- Long (long): {'y' * 100}"

    def test_candidate_without_description(self):
        assert format_candidate_line(make_product("wool-scarf", "Wool Scarf")) == "- Wool Scarf (wool-scarf)"

    def test_prompt_is_deterministic(self, sample_products):
        context = {
            "currentProductTitle": "Red Shirt",
            "userQuery": "gift",
            "availableProducts": sample_products,
        }
        assert build_recommendation_prompt(context) == build_recommendation_prompt(context)

    def test_empty_product_list(self):
        prompt = build_recommendation_prompt({"availableProducts": []})
        assert "Available Products:\n\n" in prompt

    @pytest.mark.parametrize("query", [
        "laptop < 7000 & >= 5000",
        "🎁 gift for mom 🌸",
        "<script>alert('x')</script>",
    ])
    def test_user_query_included_verbatim(self, query):
        prompt = build_recommendation_prompt({"userQuery": query, "availableProducts": []})
        assert f"User Preference: {query}" in prompt
