"""Tests for DocumentParser."""

import json
import tempfile
from pathlib import Path

from src.ref_resolver.parser import DocumentParser

DATA_DIR = Path(__file__).parent.parent / "data"


class TestDocumentParser:
    """Test cases for DocumentParser."""

    def test_parse_valid_json_file(self):
        """Test parsing a valid JSON API file."""
        test_data = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": {},
        }

        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump(test_data, f)
            temp_file = f.name

        try:
            parser = DocumentParser()
            result = parser.parse_file(temp_file)

            assert result.success is True
            assert result.data == test_data
            assert result.file_type == "json"
            assert result.error is None
        finally:
            Path(temp_file).unlink()

    def test_parse_yaml_fixture_preserves_key_order(self):
        """Test parsing a YAML fixture keeps mapping order."""
        parser = DocumentParser()
        result = parser.parse_file(DATA_DIR / "root.yaml")

        assert result.success is True
        assert result.file_type == "yaml"
        assert list(result.data) == ["openapi", "info", "tags", "paths", "components"]

    def test_parse_invalid_json_file(self):
        """Test parsing an invalid JSON file."""
        invalid_json = '{"openapi": "3.0.0", "info": {'  # Missing closing braces

        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            f.write(invalid_json)
            temp_file = f.name

        try:
            parser = DocumentParser()
            result = parser.parse_file(temp_file)

            assert result.success is False
            assert result.data is None
            assert result.file_type == "json"
            assert "Invalid JSON format" in result.error
        finally:
            Path(temp_file).unlink()

    def test_parse_invalid_yaml_text(self):
        """Test parsing invalid YAML text."""
        result = DocumentParser().parse_text("openapi: [3.0.0\n")

        assert result.success is False
        assert "Invalid YAML format" in result.error

    def test_parse_nonexistent_file(self):
        """Test parsing a file that doesn't exist."""
        parser = DocumentParser()
        result = parser.parse_file("/path/that/does/not/exist.json")

        assert result.success is False
        assert result.data is None
        assert "File not found" in result.error

    def test_parse_directory(self):
        """Test parsing a directory instead of a file."""
        result = DocumentParser().parse_file(DATA_DIR)

        assert result.success is False
        assert "Path is not a file" in result.error

    def test_unknown_extension_is_read_as_yaml(self):
        """Test that files without a known extension are parsed as YAML, which accepts JSON."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False) as f:
            f.write('{"title": "Percentage", "type": "number"}')
            temp_file = f.name

        try:
            result = DocumentParser().parse_file(temp_file)

            assert result.success is True
            assert result.file_type == "yaml"
            assert result.data == {"title": "Percentage", "type": "number"}
        finally:
            Path(temp_file).unlink()

    def test_get_file_type(self):
        """Test file type detection for names and URL paths."""
        parser = DocumentParser()

        assert parser.get_file_type("api.JSON") == "json"
        assert parser.get_file_type("/apis/v1/openapi.yml") == "yaml"
        assert parser.get_file_type("schema") == "yaml"
