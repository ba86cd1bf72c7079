#!/usr/bin/env python3
"""
Recommendation Pipeline Try-Out Script

Runs the full recommendation pipeline (prompt -> Gemini -> parse -> match ->
fallback merge) locally against a JSON file of products, without starting
the API server.

The products file is a JSON array of Storefront product summaries:
    [{"id": "...", "title": "Red Shirt", "handle": "red-shirt", "description": "..."}, ...]

Usage:
    python scripts/try_recommendations.py --products products.json
    python scripts/try_recommendations.py --products products.json --current red-shirt
    python scripts/try_recommendations.py --products products.json --query "warm winter layers"
    python scripts/try_recommendations.py --products products.json --fallback 4 --show-prompt
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from storefront.agents.recommendation.prompts import build_recommendation_prompt
from storefront.agents.recommendation.types import RecommendationContext
from storefront.config import settings
from storefront.services.recommendation_service import get_recommendations_with_fallback

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def load_products(path: Path) -> List[Dict[str, Any]]:
    """Load the product list from a JSON file."""
    products = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(products, list):
        raise SystemExit(f"{path} must contain a JSON array of products")
    return products


def build_context(
    products: List[Dict[str, Any]],
    current_handle: Optional[str],
    query: Optional[str],
) -> RecommendationContext:
    """Build the agent context, excluding the current product from candidates."""
    current = next((p for p in products if p.get("handle") == current_handle), None)
    if current_handle and current is None:
        logger.warning(f"Current product '{current_handle}' not found in products file")

    return {
        "currentProductTitle": current.get("title") if current else None,
        "currentProductDescription": current.get("description") if current else None,
        "availableProducts": [p for p in products if p is not current],
        "userQuery": query,
    }


def print_result(outcome) -> None:
    """Pretty print the pipeline outcome."""
    print("\n" + "=" * 60)
    print(f"PRODUCTS: {len(outcome.products)}")
    print("=" * 60)

    if outcome.error:
        print(f"\nAI path failed: {outcome.error}")
    if outcome.advisory:
        print(f"Advisory: {outcome.advisory}")

    print()
    for i, product in enumerate(outcome.products, 1):
        price = ((product.get("priceRange") or {}).get("minVariantPrice") or {})
        price_display = f"{price.get('amount')} {price.get('currencyCode')}" if price else "-"
        print(f"  {i}. {product.get('title')} ({product.get('handle')})  {price_display}")
    print()


async def run(args: argparse.Namespace) -> int:
    if not settings.GEMINI_API_KEY:
        print("\nWARNING: GEMINI_API_KEY is not set, the pipeline will use fallback products only.")
        print("   Set it in your .env file or export GEMINI_API_KEY=...\n")

    products = load_products(Path(args.products))
    context = build_context(products, args.current, args.query)
    fallback = products[: args.fallback] if args.fallback else []

    if args.show_prompt:
        print("\n" + "-" * 60)
        print(build_recommendation_prompt(context))
        print("-" * 60)

    outcome = await get_recommendations_with_fallback(
        settings.GEMINI_API_KEY,
        context,
        fallback,
    )
    print_result(outcome)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Try the recommendation pipeline locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/try_recommendations.py --products products.json
  python scripts/try_recommendations.py --products products.json \\
    --current red-shirt --query "matching accessories" --fallback 6
"""
    )

    parser.add_argument(
        "--products",
        type=str,
        required=True,
        help="Path to a JSON array of product summaries"
    )
    parser.add_argument(
        "--current",
        type=str,
        help="Handle of the product being viewed (optional)"
    )
    parser.add_argument(
        "--query",
        type=str,
        help="Shopper preference (optional)"
    )
    parser.add_argument(
        "--fallback",
        type=int,
        default=0,
        help="Use the first N products as the fallback list (default: 0)"
    )
    parser.add_argument(
        "--show-prompt",
        action="store_true",
        help="Print the prompt sent to Gemini"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
