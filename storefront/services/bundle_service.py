"""
Bundle service.

Loads "bundle" metaobjects from the Storefront API and turns their typed
key/value fields into what the bundle pages render:

- a flat field record (rich text flattened, file references resolved)
- the ordered list of referenced products, each with its first variant
- pricing (subtotal, bundle price, savings label)
- cart lines for every product that can currently be bought

Bundle types:
- fixed_price: discount_value is the bundle's total price
- percentage:  discount_value is a percentage off the subtotal
- anything else: the bundle costs the subtotal
"""

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

from storefront.commerce.client import StorefrontClient
from storefront.commerce.queries import BUNDLE_BY_HANDLE_QUERY, BUNDLES_QUERY
from storefront.utils.constants import (
    BUNDLE_INDEX_PAGE_SIZE,
    BUNDLE_TYPE_LABELS,
    DEFAULT_BUNDLE_TITLE,
    DEFAULT_BUNDLE_TYPE_LABEL,
)
from storefront.utils.rich_text import extract_plain_text

logger = logging.getLogger(__name__)

PRODUCT_FIELD_TYPES = ("product_reference", "list.product_reference")

# Leading decimal number, the way a lenient float parse reads "80", "80.5 INR", ".5"
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(value: Any) -> Optional[float]:
    """
    Parse the numeric prefix of a money/discount value.

    Returns None when no number can be read.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    match = _LEADING_NUMBER_RE.match(value)
    if not match:
        return None
    amount = float(match.group(1))
    return amount if math.isfinite(amount) else None


# =============================================================================
# FIELD NORMALIZATION
# =============================================================================

def format_image_reference(reference: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    """Resolve a MediaImage or GenericFile reference to {url, altText}."""
    if not reference:
        return None

    typename = reference.get("__typename")

    if typename == "MediaImage":
        image = reference.get("image") or {}
        url = image.get("url")
        if not url:
            return None
        return {"url": url, "altText": image.get("altText") or ""}

    if typename == "GenericFile":
        url = reference.get("url")
        if not url:
            return None
        return {"url": url, "altText": reference.get("alt") or ""}

    return None


def format_bundle_fields(fields: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Flatten metaobject fields into a plain record keyed by field key.

    The `products` field is skipped (see collect_products). Rich text becomes
    plain text, file references become {url, altText} and are left out when
    they cannot be resolved. Everything else keeps its raw string value.
    """
    record: Dict[str, Any] = {}

    for field in fields:
        key = field.get("key")
        if not key or key == "products":
            continue

        field_type = field.get("type")

        if field_type == "rich_text_field":
            record[key] = extract_plain_text(field.get("value"))
        elif field_type == "file_reference":
            image = format_image_reference(field.get("reference"))
            if image:
                record[key] = image
        else:
            record[key] = field.get("value")

    return record


def _is_product(reference: Any) -> bool:
    return isinstance(reference, dict) and reference.get("__typename") == "Product"


def normalize_product(reference: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a product reference and attach its first variant (or None)."""
    variants = (reference.get("variants") or {}).get("nodes") or []
    return {**reference, "firstVariant": variants[0] if variants else None}


def collect_products(fields: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Collect referenced products from product reference fields, in field order.

    Single references come first for each field, then list references
    (`references.nodes`, or `references.edges[].node`).
    """
    products: List[Dict[str, Any]] = []

    for field in fields:
        if field.get("type") not in PRODUCT_FIELD_TYPES:
            continue

        if _is_product(field.get("reference")):
            products.append(field["reference"])

        references = field.get("references") or {}
        nodes = references.get("nodes")
        if nodes is None:
            nodes = [edge.get("node") for edge in references.get("edges") or [] if edge]

        products.extend(node for node in nodes if _is_product(node))

    return [normalize_product(product) for product in products]


# =============================================================================
# PRICING
# =============================================================================

def _format_whole(value: float) -> str:
    """Round to a whole number, halves away from zero ("12.5" -> "13")."""
    return str(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _product_amount(product: Dict[str, Any]) -> float:
    price_range = product.get("priceRange") or {}
    min_price = price_range.get("minVariantPrice") or {}
    amount = parse_amount(min_price.get("amount"))
    return amount if amount is not None else 0.0


def calculate_bundle_pricing(
    products: List[Dict[str, Any]],
    bundle_type: Optional[str],
    discount_value: Any,
) -> Dict[str, Any]:
    """
    Compute subtotal, bundle price and savings label for a bundle.

    A discount value that is not a number means "no discount": the bundle
    price is the subtotal and the label is empty.
    """
    subtotal = sum(_product_amount(product) for product in products)
    bundle_price = subtotal
    savings_label = ""

    if bundle_type in ("fixed_price", "percentage"):
        discount = parse_amount(discount_value)

        if discount is None:
            logger.warning(
                f"Bundle discount_value {discount_value!r} is not numeric, "
                f"pricing {bundle_type} bundle at subtotal"
            )
        elif bundle_type == "fixed_price":
            bundle_price = discount
            savings = subtotal - bundle_price
            if savings > 0:
                savings_label = f"You save {_format_whole(savings)}"
        else:
            savings = subtotal * discount / 100
            bundle_price = subtotal - savings
            savings_label = f"You save {_format_whole(discount)}%"

    return {
        "subtotal": subtotal,
        "bundlePrice": bundle_price,
        "savingsLabel": savings_label,
    }


# =============================================================================
# CART LINES
# =============================================================================

def build_bundle_cart_lines(bundle: Dict[str, Any], products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One cart line per product whose first variant is purchasable."""
    lines = []

    for product in products:
        variant = product.get("firstVariant") or {}
        if not variant.get("id") or not variant.get("availableForSale"):
            continue

        lines.append({
            "merchandiseId": variant["id"],
            "quantity": 1,
            "attributes": [
                {"key": "bundleId", "value": bundle["id"]},
                {"key": "bundleHandle", "value": bundle["handle"]},
            ],
        })

    return lines


# =============================================================================
# LOADERS
# =============================================================================

def build_bundle_detail(metaobject: Dict[str, Any]) -> Dict[str, Any]:
    """Assemble the bundle detail page payload from a metaobject."""
    fields = metaobject.get("fields") or []

    bundle = {
        "id": metaobject["id"],
        "handle": metaobject["handle"],
        **format_bundle_fields(fields),
    }
    products = collect_products(fields)
    pricing = calculate_bundle_pricing(
        products,
        bundle.get("bundle_type"),
        bundle.get("discount_value"),
    )
    cart_lines = build_bundle_cart_lines(bundle, products)

    currency_code = None
    if products:
        currency_code = (
            (products[0].get("priceRange") or {}).get("minVariantPrice") or {}
        ).get("currencyCode")

    return {
        "bundle": bundle,
        "products": products,
        "pricing": pricing,
        "cartLines": cart_lines,
        "hasUnavailableProducts": len(cart_lines) != len(products),
        "currencyCode": currency_code,
    }


async def get_bundle_by_handle(client: StorefrontClient, handle: str) -> Optional[Dict[str, Any]]:
    """
    Load one bundle by handle.

    Returns:
        Bundle detail payload, or None when no bundle has this handle

    Raises:
        StorefrontAPIError: If the Storefront API call fails
    """
    logger.info(f"Loading bundle handle='{handle}'")

    data = await client.query(BUNDLE_BY_HANDLE_QUERY, {"handle": handle})
    metaobject = data.get("metaobject")

    if not metaobject:
        logger.info(f"Bundle handle='{handle}' not found")
        return None

    detail = build_bundle_detail(metaobject)
    logger.info(
        f"Bundle handle='{handle}' loaded with {len(detail['products'])} products "
        f"({len(detail['cartLines'])} purchasable)"
    )
    return detail


def summarize_bundle(metaobject: Dict[str, Any]) -> Dict[str, Any]:
    """Build the bundle index card for a metaobject."""
    formatted = format_bundle_fields(metaobject.get("fields") or [])
    bundle_type = formatted.get("bundle_type")
    discount_value = formatted.get("discount_value")

    if bundle_type == "percentage" and discount_value:
        offer_label = f"Bundle & save {discount_value}%"
    elif bundle_type == "fixed_price" and discount_value:
        offer_label = f"Bundle price {discount_value}"
    else:
        offer_label = "Build your own mix"

    image = formatted.get("image")

    return {
        "id": metaobject["id"],
        "handle": metaobject["handle"],
        "title": formatted.get("title") or DEFAULT_BUNDLE_TITLE,
        "subtitle": formatted.get("subtitle"),
        "description": formatted.get("description") or "",
        "image": image if isinstance(image, dict) else None,
        "bundleType": bundle_type,
        "discountValue": discount_value,
        "badgeLabel": BUNDLE_TYPE_LABELS.get(bundle_type, DEFAULT_BUNDLE_TYPE_LABEL),
        "offerLabel": offer_label,
    }


async def list_bundles(client: StorefrontClient) -> List[Dict[str, Any]]:
    """
    List bundle cards for the bundle index page.

    Raises:
        StorefrontAPIError: If the Storefront API call fails
    """
    data = await client.query(BUNDLES_QUERY, {"first": BUNDLE_INDEX_PAGE_SIZE})
    nodes = (data.get("metaobjects") or {}).get("nodes") or []

    logger.info(f"Listing {len(nodes)} bundles")
    return [summarize_bundle(node) for node in nodes]
