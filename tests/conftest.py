"""
Pytest configuration for storefront backend tests.

Sets up test environment and global fixtures.
"""
import os
import json
import pytest
from unittest.mock import AsyncMock, MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("PUBLIC_STORE_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("PUBLIC_STOREFRONT_API_TOKEN", "test-storefront-token")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-api-key")

from google.genai import types  # noqa: E402


def make_product(handle, title=None, amount="10.0", description=None):
    """Build a Storefront product summary dict."""
    product = {
        "id": f"gid://shopify/Product/{handle}",
        "title": title or handle.replace("-", " ").title(),
        "handle": handle,
        "priceRange": {"minVariantPrice": {"amount": amount, "currencyCode": "INR"}},
    }
    if description is not None:
        product["description"] = description
    return product


def make_gemini_response(text):
    """Build a real Gemini response object whose first part carries `text`."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)])
            )
        ]
    )


def make_gemini_client(text=None, response=None, side_effect=None):
    """
    Mock google-genai client exposing client.aio.models.generate_content.
    """
    mock_client = MagicMock()
    if side_effect is not None:
        mock_client.aio.models.generate_content = AsyncMock(side_effect=side_effect)
    else:
        mock_client.aio.models.generate_content = AsyncMock(
            return_value=response if response is not None else make_gemini_response(text)
        )
    return mock_client


@pytest.fixture
def sample_products():
    """Catalogue slice offered to the model."""
    return [
        make_product("red-shirt", "Red Shirt", "25.0", "A bright red cotton shirt"),
        make_product("blue-jeans", "Blue Jeans", "60.0", "Slim fit denim"),
        make_product("wool-scarf", "Wool Scarf", "15.0"),
        make_product("leather-belt", "Leather Belt", "30.0"),
        make_product("canvas-bag", "Canvas Bag", "20.0"),
        make_product("sun-hat", "Sun Hat", "18.0"),
        make_product("rain-coat", "Rain Coat", "90.0"),
    ]


@pytest.fixture
def fallback_products():
    """Popular products used when AI results are sparse."""
    return [
        make_product("best-seller-1"),
        make_product("best-seller-2"),
        make_product("red-shirt", "Red Shirt", "25.0"),
        make_product("best-seller-3"),
        make_product("best-seller-4"),
        make_product("best-seller-5"),
        make_product("best-seller-6"),
        make_product("best-seller-7"),
    ]


@pytest.fixture
def gemini_ok_text():
    """Typical model output: array wrapped in a markdown fence."""
    return "```json\n" + json.dumps(["red-shirt", "blue-jeans", "wool-scarf", "leather-belt"]) + "\n```"


def _bundle_product(handle, amount, variant_available=True, with_variant=True):
    return {
        "__typename": "Product",
        "id": f"gid://shopify/Product/{handle}",
        "handle": handle,
        "title": handle.replace("-", " ").title(),
        "featuredImage": {"url": f"https://cdn.shopify.com/{handle}.jpg", "altText": None},
        "variants": {
            "nodes": [
                {
                    "id": f"gid://shopify/ProductVariant/{handle}",
                    "availableForSale": variant_available,
                    "title": "Default Title",
                }
            ] if with_variant else []
        },
        "priceRange": {"minVariantPrice": {"amount": amount, "currencyCode": "INR"}},
    }


@pytest.fixture
def bundle_metaobject():
    """Bundle metaobject as returned by the BundleByHandle query."""
    return {
        "id": "gid://shopify/Metaobject/1",
        "handle": "summer-kit",
        "fields": [
            {"key": "title", "value": "Summer Kit", "type": "single_line_text_field",
             "reference": None, "references": None},
            {"key": "description", "type": "rich_text_field", "reference": None, "references": None,
             "value": json.dumps({
                 "type": "root",
                 "children": [
                     {"type": "paragraph", "children": [
                         {"type": "text", "value": "Everything for"},
                         {"type": "text", "value": "  the beach."},
                     ]},
                 ],
             })},
            {"key": "image", "value": "gid://shopify/MediaImage/9", "type": "file_reference",
             "reference": {"__typename": "MediaImage", "id": "gid://shopify/MediaImage/9",
                           "image": {"url": "https://cdn.shopify.com/kit.jpg", "altText": "Kit"}},
             "references": None},
            {"key": "bundle_type", "value": "fixed_price", "type": "single_line_text_field",
             "reference": None, "references": None},
            {"key": "discount_value", "value": "80", "type": "number_decimal",
             "reference": None, "references": None},
            {"key": "products", "value": "[\"gid://shopify/Product/sun-hat\"]",
             "type": "list.product_reference", "reference": None,
             "references": {"nodes": [
                 _bundle_product("sun-hat", "60.0"),
                 _bundle_product("beach-towel", "40.0", variant_available=False),
             ]}},
        ],
    }


@pytest.fixture
def bundle_product_factory():
    """Factory for bundle product references."""
    return _bundle_product
