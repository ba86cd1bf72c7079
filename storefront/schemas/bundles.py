"""
Pydantic schemas for bundle endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from storefront.schemas.products import CamelModel, PriceRange


class BundleImage(CamelModel):
    """Resolved file reference."""
    url: str
    alt_text: Optional[str] = ""


class BundleVariant(CamelModel):
    """First variant of a bundled product."""

    model_config = ConfigDict(extra="allow")

    id: str
    available_for_sale: bool = False
    title: Optional[str] = None


class BundleProduct(CamelModel):
    """Product referenced by a bundle."""

    model_config = ConfigDict(extra="allow")

    id: str
    handle: str
    title: str
    featured_image: Optional[BundleImage] = None
    price_range: Optional[PriceRange] = None
    first_variant: Optional[BundleVariant] = None


class BundlePricing(CamelModel):
    """Bundle pricing summary."""
    subtotal: float = Field(..., examples=[100.0])
    bundle_price: float = Field(..., examples=[80.0])
    savings_label: str = Field("", examples=["You save 20", "You save 25%"])


class CartLineAttribute(CamelModel):
    key: str
    value: str


class CartLine(CamelModel):
    """Cart line input for adding one bundled product."""
    merchandise_id: str
    quantity: int = 1
    attributes: List[CartLineAttribute] = Field(default_factory=list)


class BundleDetailResponse(CamelModel):
    """
    Response for GET /bundles/{handle}.

    `bundle` holds id, handle and every flattened metaobject field
    (title, description, image, bundle_type, discount_value, ...).
    """
    bundle: Dict[str, Any]
    products: List[BundleProduct]
    pricing: BundlePricing
    cart_lines: List[CartLine]
    has_unavailable_products: bool
    currency_code: Optional[str] = None


class BundleSummary(CamelModel):
    """Bundle card for the bundle index."""
    id: str
    handle: str
    title: str
    subtitle: Optional[str] = None
    description: str = ""
    image: Optional[BundleImage] = None
    bundle_type: Optional[str] = None
    discount_value: Optional[str] = None
    badge_label: str = Field(..., examples=["Smart Saver", "Flat Price", "Custom Bundle"])
    offer_label: str = Field(..., examples=["Bundle & save 25%"])


class BundleListResponse(CamelModel):
    """Response for GET /bundles."""
    bundles: List[BundleSummary]
    count: int
