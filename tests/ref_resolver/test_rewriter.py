"""Tests for ReferenceRewriter."""

from src.ref_resolver.rewriter import ReferenceRewriter

LOCATOR = "file:///specs/schemas/range.yaml"


def _range_document():
    return {
        "type": "object",
        "properties": {
            "low": {"$ref": "percentage.yaml"},
            "width": {"$ref": "#/properties/low"},
            "unit": {"$ref": "#/components/schemas/unit"},
            "remote": {"$ref": "https://example.com/schemas/remote.yaml"},
        },
    }


class TestReferenceRewriter:
    """Test cases for ReferenceRewriter."""

    def test_rewrite_fragments(self):
        """Test that local references are re-anchored at the splice path."""
        document = _range_document()
        rewriter = ReferenceRewriter()

        changed = rewriter.rewrite_fragments(document, LOCATOR, "#/components/schemas/thing/properties/range")

        props = document["properties"]
        assert changed is True
        assert props["width"]["$ref"] == "#/components/schemas/thing/properties/range/properties/low"
        assert props["unit"]["$ref"] == "file:///specs/schemas/range.yaml#/components/schemas/unit"
        assert props["low"]["$ref"] == "percentage.yaml"
        assert rewriter.was_fragment_rewritten(LOCATOR)

    def test_rewrite_paths(self):
        """Test that relative references become absolute and local ones are kept."""
        document = _range_document()
        rewriter = ReferenceRewriter()

        rewriter.rewrite_paths(document, LOCATOR)

        props = document["properties"]
        assert props["low"]["$ref"] == "file:///specs/schemas/percentage.yaml"
        assert props["width"]["$ref"] == "#/properties/low"
        assert props["remote"]["$ref"] == "https://example.com/schemas/remote.yaml"
        assert rewriter.was_path_rewritten(LOCATOR)

    def test_rewrites_apply_once(self):
        """Test that a document is rewritten at most once per kind."""
        document = _range_document()
        rewriter = ReferenceRewriter()

        assert rewriter.rewrite_fragments(document, LOCATOR, "#/a") is True
        assert rewriter.rewrite_fragments(document, LOCATOR, "#/b") is False
        assert rewriter.rewrite_paths(document, LOCATOR) is True
        assert rewriter.rewrite_paths(document, LOCATOR) is False

        assert document["properties"]["width"]["$ref"] == "#/a/properties/low"

    def test_fragments_then_paths(self):
        """Test applying both rewrites in order leaves no relative reference."""
        document = _range_document()
        rewriter = ReferenceRewriter()

        rewriter.rewrite_fragments(document, LOCATOR, "#/x")
        rewriter.rewrite_paths(document, LOCATOR)

        refs = sorted(node["$ref"] for node in rewriter.scanner.iter_ref_nodes(document))
        assert refs == [
            "#/x/properties/low",
            "file:///specs/schemas/percentage.yaml",
            "file:///specs/schemas/range.yaml#/components/schemas/unit",
            "https://example.com/schemas/remote.yaml",
        ]

    def test_qualify_local_refs(self):
        """Test that local references of an extracted copy point back at the source."""
        item = {"allOf": [{"$ref": "#/components/schemas/base"}, {"$ref": "other.yaml"}]}
        rewriter = ReferenceRewriter()

        rewriter.qualify_local_refs(item, LOCATOR)

        assert item["allOf"][0]["$ref"] == "file:///specs/schemas/range.yaml#/components/schemas/base"
        assert item["allOf"][1]["$ref"] == "other.yaml"

    def test_qualify_skips_spliced_documents(self):
        """Test that copies from a spliced document keep their re-anchored references."""
        rewriter = ReferenceRewriter()
        rewriter.rewrite_fragments({}, LOCATOR, "#/a")
        item = {"$ref": "#/a/properties/low"}

        rewriter.qualify_local_refs(item, LOCATOR)

        assert item == {"$ref": "#/a/properties/low"}
