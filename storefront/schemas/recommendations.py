"""
Pydantic schemas for recommendation endpoints.

These models define the request/response contracts for the Gemini-backed
recommendation API and for the widget pipeline that resolves handles into
products with a fallback list.
"""

from typing import List, Optional

from pydantic import Field

from storefront.agents.recommendation.types import RecommendationContext
from storefront.schemas.products import CamelModel, ProductSummary

# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationRequest(CamelModel):
    """
    Request for AI recommendations over a set of candidate products.

    Frontend scenarios:
    - Product page: current product plus the rest of the collection
    - Search/landing page: shopper preference plus a product list
    """
    current_product_title: Optional[str] = Field(
        None,
        description="Title of the product the shopper is looking at",
        examples=["Red Shirt"]
    )
    current_product_description: Optional[str] = Field(
        None,
        description="Description of the current product (first 300 chars are used)"
    )
    available_products: List[ProductSummary] = Field(
        default_factory=list,
        description="Candidate products; only the first 20 are shown to the model"
    )
    user_query: Optional[str] = Field(
        None,
        description="Shopper's free-text preference",
        examples=["something warm for winter"]
    )

    def to_context(self) -> RecommendationContext:
        """Convert to the agent's context dict."""
        return {
            "currentProductTitle": self.current_product_title,
            "currentProductDescription": self.current_product_description,
            "availableProducts": [product.to_payload() for product in self.available_products],
            "userQuery": self.user_query,
        }


class ProductRecommendationRequest(RecommendationRequest):
    """
    Widget request: recommendations resolved to products, padded with fallbacks.
    """
    fallback_products: List[ProductSummary] = Field(
        default_factory=list,
        description="Products shown when AI results are sparse or unavailable"
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationResponse(CamelModel):
    """Handles chosen by the model, in the model's order."""
    recommendations: List[str] = Field(
        ...,
        description="Product handles (may include handles unknown to the catalogue)",
        examples=[["red-shirt", "blue-jeans", "wool-scarf", "leather-belt"]]
    )


class RecommendationErrorResponse(CamelModel):
    """Error payload for the recommendations endpoint."""
    error: str = Field(
        ...,
        examples=["Gemini API key not configured", "Method not allowed"]
    )


class RecommendationInfoResponse(CamelModel):
    """Informational payload returned for GET requests."""
    message: str = Field(
        "Use POST to get recommendations",
        examples=["Use POST to get recommendations"]
    )


class ProductRecommendationResponse(CamelModel):
    """
    Products to render in the recommendation widget.

    When the AI path failed, `error` carries the reason and `advisory` the
    note to show above the products.
    """
    products: List[ProductSummary] = Field(
        default_factory=list,
        description="At most 6 distinct products, AI picks first"
    )
    error: Optional[str] = None
    advisory: Optional[str] = Field(
        None,
        examples=["Some recommendations may be AI-powered"]
    )
