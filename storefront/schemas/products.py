"""
Product summary schemas shared by the recommendation endpoints.

Field names follow the Storefront API's camelCase on the wire; snake_case is
accepted too. Unknown keys are kept, so echoed products carry every field the
client sent; keys whose value is null are dropped.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Money(CamelModel):
    """Storefront MoneyV2."""

    amount: Union[str, float] = Field(
        ...,
        description="Decimal amount as returned by the Storefront API",
        examples=["129.0"]
    )
    currency_code: str = Field(
        ...,
        description="ISO 4217 currency code",
        examples=["INR", "USD"]
    )


class PriceRange(CamelModel):
    """Price range of a product's variants."""

    min_variant_price: Money


class ProductImage(CamelModel):
    """Featured image of a product."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    url: str
    alt_text: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class ProductSummary(CamelModel):
    """
    Snapshot of a catalogue product used for recommendations.

    The handle is the key the model answers with and the key products are
    deduplicated by.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., examples=["gid://shopify/Product/1"])
    title: str = Field(..., examples=["Red Shirt"])
    handle: str = Field(..., examples=["red-shirt"])
    description: Optional[str] = None
    price_range: Optional[PriceRange] = None
    featured_image: Optional[ProductImage] = None
    vendor: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Plain camelCase dict used by the service layer, null values omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
