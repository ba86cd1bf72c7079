"""
Rich text helpers for Shopify metaobject fields.

A `rich_text_field` value is a JSON document such as::

    {"type": "root", "children": [
        {"type": "paragraph", "children": [{"type": "text", "value": "Hello"}]}
    ]}

The document is converted into a small tagged tree (TextNode | ContainerNode)
and plain text is produced by folding over it, so the extraction never deals
with the raw JSON shape.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class TextNode:
    """Leaf carrying literal text."""
    value: str


@dataclass(frozen=True)
class ContainerNode:
    """Any non-text node (root, paragraph, heading, list, link...)."""
    children: List["RichTextNode"] = field(default_factory=list)


RichTextNode = Union[TextNode, ContainerNode]


def parse_rich_text_node(raw: Any) -> Optional[RichTextNode]:
    """
    Convert a decoded rich text JSON node into the tagged tree.

    Returns None for values that carry no text (null, scalars, nodes without
    a children list).
    """
    if not isinstance(raw, dict):
        return None

    if raw.get("type") == "text":
        value = raw.get("value")
        return TextNode(value=value if isinstance(value, str) else "")

    children = raw.get("children")
    if not isinstance(children, list):
        return None

    parsed = [parse_rich_text_node(child) for child in children]
    return ContainerNode(children=[node for node in parsed if node is not None])


def fold_plain_text(node: Optional[RichTextNode]) -> str:
    """Depth-first fold joining every text leaf with a single space."""
    if node is None:
        return ""
    if isinstance(node, TextNode):
        return node.value
    return " ".join(fold_plain_text(child) for child in node.children)


def extract_plain_text(value: Optional[str]) -> str:
    """
    Extract plain text from a JSON-encoded rich text document.

    Whitespace runs are collapsed and the result trimmed. Values that are not
    valid JSON are returned unchanged.
    """
    if not value:
        return ""

    try:
        document = json.loads(value)
    except (TypeError, ValueError):
        return value

    text = fold_plain_text(parse_rich_text_node(document))
    return _WHITESPACE_RE.sub(" ", text).strip()
