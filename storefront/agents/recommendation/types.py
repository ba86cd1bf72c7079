"""
Recommendation Agent Type Definitions

Input contract for the recommendation agent. Products travel as plain dicts
in the Storefront API's camelCase shape so that whatever the caller sent is
returned to it untouched.
"""

from typing import Any, Dict, List, Optional, TypedDict


class RecommendationContext(TypedDict, total=False):
    """Context for a single recommendation call."""
    currentProductTitle: Optional[str]
    currentProductDescription: Optional[str]
    availableProducts: List[Dict[str, Any]]
    userQuery: Optional[str]
