"""
Tests for rich text extraction (metaobject rich_text_field values).
"""

import json

from storefront.utils.rich_text import (
    ContainerNode,
    TextNode,
    extract_plain_text,
    fold_plain_text,
    parse_rich_text_node,
)


class TestParseRichTextNode:
    """Tests for converting decoded JSON into the tagged tree."""

    def test_text_node(self):
        assert parse_rich_text_node({"type": "text", "value": "Hi"}) == TextNode(value="Hi")

    def test_text_node_without_value(self):
        assert parse_rich_text_node({"type": "text"}) == TextNode(value="")

    def test_container_drops_non_nodes(self):
        node = parse_rich_text_node({
            "type": "root",
            "children": [None, "stray", {"type": "text", "value": "ok"}],
        })
        assert node == ContainerNode(children=[TextNode(value="ok")])

    def test_node_without_children_is_none(self):
        assert parse_rich_text_node({"type": "paragraph"}) is None

    def test_scalar_is_none(self):
        assert parse_rich_text_node(42) is None


class TestFoldPlainText:

    def test_nested_fold_is_depth_first(self):
        tree = ContainerNode(children=[
            ContainerNode(children=[TextNode("a"), TextNode("b")]),
            TextNode("c"),
        ])
        assert fold_plain_text(tree) == "a b c"

    def test_none(self):
        assert fold_plain_text(None) == ""


class TestExtractPlainText:
    """Tests for extract_plain_text."""

    def test_flat_document(self):
        value = json.dumps({
            "type": "root",
            "children": [
                {"type": "text", "value": "Hello"},
                {"type": "text", "value": "world"},
            ],
        })
        assert extract_plain_text(value) == "Hello world"

    def test_paragraphs_and_whitespace_collapse(self):
        value = json.dumps({
            "type": "root",
            "children": [
                {"type": "paragraph", "children": [{"type": "text", "value": "  Light\n and "}]},
                {"type": "paragraph", "children": [{"type": "text", "value": "breezy  "}]},
            ],
        })
        assert extract_plain_text(value) == "Light and breezy"

    def test_link_children_are_included(self):
        value = json.dumps({
            "type": "root",
            "children": [{"type": "paragraph", "children": [
                {"type": "text", "value": "See"},
                {"type": "link", "url": "https://x", "children": [{"type": "text", "value": "details"}]},
            ]}],
        })
        assert extract_plain_text(value) == "See details"

    def test_malformed_json_returns_raw_value(self):
        assert extract_plain_text("{not json") == "{not json"

    def test_plain_string_returns_raw_value(self):
        assert extract_plain_text("Just a sentence") == "Just a sentence"

    def test_empty_and_none(self):
        assert extract_plain_text("") == ""
        assert extract_plain_text(None) == ""

    def test_json_without_text_nodes(self):
        assert extract_plain_text(json.dumps({"type": "root", "children": []})) == ""
