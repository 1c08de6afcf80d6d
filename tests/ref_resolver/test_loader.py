"""Tests for Location and DocumentLoader."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from src.ref_resolver.errors import InvalidReferenceError, ResourceError
from src.ref_resolver.loader import DocumentLoader, Location, to_root_location

DATA_DIR = Path(__file__).parent.parent / "data"


def _response(text, content_type="application/yaml"):
    response = Mock()
    response.text = text
    response.headers = {"Content-Type": content_type}
    response.raise_for_status.return_value = None
    return response


class TestLocation:
    """Test cases for Location parsing and normalization."""

    def test_parse_relative_reference(self):
        """Test resolving a relative reference against a file locator."""
        location = Location.parse(
            "../api-a/api.yaml#/components/schemas/thing", "file:///specs/api-b/api.yaml"
        )

        assert location.locator == "file:///specs/api-a/api.yaml"
        assert location.fragment == "/components/schemas/thing"
        assert str(location) == "file:///specs/api-a/api.yaml#/components/schemas/thing"

    def test_parse_without_fragment(self):
        """Test that an empty fragment is dropped from the canonical form."""
        location = Location.parse("schemas/percentage.yaml#", "https://example.com/apis/api.yaml")

        assert location.fragment == ""
        assert str(location) == "https://example.com/apis/schemas/percentage.yaml"

    def test_equal_locations_compare_equal(self):
        """Test that locations compare by value."""
        first = Location.parse("./a.yaml#/x", "file:///specs/api.yaml")
        second = Location.parse("sub/../a.yaml#/x", "file:///specs/api.yaml")

        assert first == second
        assert hash(first) == hash(second)

    def test_parse_percent_encoded_fragment(self):
        """Test that percent-encoded pointers are decoded."""
        location = Location.parse("a.yaml#/paths/~1things~1%7Bid%7D", "file:///specs/api.yaml")

        assert location.fragment == "/paths/~1things~1{id}"

    def test_parse_rejects_plain_name_fragment(self):
        """Test that non-pointer fragments are invalid references."""
        with pytest.raises(InvalidReferenceError, match="fragment must be a JSON pointer"):
            Location.parse("a.yaml#thing", "file:///specs/api.yaml")

    def test_parse_rejects_empty_and_relative_without_base(self):
        """Test that empty or unanchored references are invalid."""
        with pytest.raises(InvalidReferenceError):
            Location.parse("", "file:///specs/api.yaml")
        with pytest.raises(InvalidReferenceError, match="cannot be made absolute"):
            Location.parse("a.yaml")

    def test_to_root_location_from_path(self):
        """Test that filesystem paths become absolute file URLs."""
        location = to_root_location(DATA_DIR / "root.yaml")

        assert location.locator.startswith("file:///")
        assert location.locator.endswith("/tests/data/root.yaml")
        assert location.fragment == ""

    def test_to_root_location_from_url(self):
        """Test that URLs are used as given."""
        location = to_root_location("https://example.com/apis/api.yaml")

        assert location == Location("https://example.com/apis/api.yaml")


class TestDocumentLoader:
    """Test cases for DocumentLoader."""

    def test_load_file_once(self):
        """Test that a document is parsed once and then served from the cache."""
        loader = DocumentLoader()
        location = to_root_location(DATA_DIR / "root.yaml")

        first = loader.load(location)
        second = loader.load(location.with_fragment("/paths"))

        assert first is second
        assert loader.is_cached(location.locator)
        assert first["info"]["title"] == "Root API Elements"

    def test_register_seeds_cache(self):
        """Test that registered documents are never fetched."""
        loader = DocumentLoader()
        document = {"openapi": "3.1.0"}
        loader.register("file:///nowhere/api.yaml", document)

        assert loader.load("file:///nowhere/api.yaml") is document

    def test_missing_file(self):
        """Test that an unreachable file is a ResourceError."""
        loader = DocumentLoader()

        with pytest.raises(ResourceError, match="File not found"):
            loader.load(to_root_location(DATA_DIR / "missing.yaml"))

    def test_unsupported_scheme(self):
        """Test that unknown URL schemes are rejected."""
        with pytest.raises(ResourceError, match="unsupported URL scheme 'ftp'"):
            DocumentLoader().load("ftp://example.com/api.yaml")

    @patch("src.ref_resolver.loader.requests.get")
    def test_load_http(self, mock_get):
        """Test fetching a YAML document over HTTPS."""
        mock_get.return_value = _response("components:\n  schemas:\n    pet:\n      type: object\n")
        loader = DocumentLoader(http_timeout=5)

        document = loader.load("https://example.com/apis/common.yaml")
        loader.load("https://example.com/apis/common.yaml")

        assert document == {"components": {"schemas": {"pet": {"type": "object"}}}}
        mock_get.assert_called_once_with("https://example.com/apis/common.yaml", timeout=5)

    @patch("src.ref_resolver.loader.requests.get")
    def test_load_http_json_content_type(self, mock_get):
        """Test that a JSON content type selects the JSON parser."""
        mock_get.return_value = _response('{"type": "string"}', "application/json; charset=utf-8")

        assert DocumentLoader().load("https://example.com/schema") == {"type": "string"}

    @patch("src.ref_resolver.loader.requests.get")
    def test_load_http_failure(self, mock_get):
        """Test that HTTP failures become ResourceError."""
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ResourceError, match="connection refused"):
            DocumentLoader().load("https://example.com/apis/common.yaml")

    @patch("src.ref_resolver.loader.requests.get")
    def test_load_http_unparsable(self, mock_get):
        """Test that an unparsable body is a ResourceError."""
        mock_get.return_value = _response("{not json", "application/json")

        with pytest.raises(ResourceError, match="Invalid JSON format"):
            DocumentLoader().load("https://example.com/apis/broken.json")
