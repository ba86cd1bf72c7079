"""
Parse the handle array out of free-form model output.

Gemini is asked for a bare JSON array but frequently wraps it in prose or a
```json fence. The first greedy bracketed span (newlines allowed) is taken as
the array.
"""

import json
import logging
import re
from typing import List

from storefront.agents.recommendation.errors import ParseError

logger = logging.getLogger(__name__)

_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


def parse_recommendation_handles(text: str) -> List[str]:
    """
    Extract the ordered list of handles from the model response text.

    Duplicates and unknown handles are kept; matching against the catalogue
    happens later. Non-string array elements are dropped.

    Raises:
        ParseError: No bracketed span, invalid JSON, or a non-array value
    """
    match = _ARRAY_RE.search(text or "")
    if not match:
        raise ParseError("Could not parse recommendations from Gemini response", raw_text=text)

    try:
        decoded = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Could not parse recommendations from Gemini response: {e}",
            raw_text=text,
        ) from e

    if not isinstance(decoded, list):
        raise ParseError("Gemini response is not an array", raw_text=text)

    handles = [item for item in decoded if isinstance(item, str)]
    if len(handles) != len(decoded):
        logger.debug(f"Dropped {len(decoded) - len(handles)} non-string entries from Gemini array")

    return handles
