"""Parser for API documents written in JSON or YAML."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml


@dataclass
class ParseResult:
    """Result of parsing an API document."""

    success: bool
    data: Any = None
    error: str = None
    file_type: str = None  # 'json' or 'yaml'


class DocumentParser:
    """Parses OpenAPI/AsyncAPI documents in JSON or YAML format."""

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Parse an API document file.

        Args:
            file_path: Path to the document (.json, .yaml, .yml or any other
                extension, which is read as YAML)

        Returns:
            ParseResult with parsed data or error information
        """
        file_path = Path(file_path)

        if not file_path.exists():
            return ParseResult(success=False, error=f"File not found: {file_path}")

        if not file_path.is_file():
            return ParseResult(success=False, error=f"Path is not a file: {file_path}")

        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return ParseResult(success=False, error=f"Unable to read file as UTF-8: {e}")
        except OSError as e:
            return ParseResult(success=False, error=f"Error reading file: {e}")

        return self.parse_text(content, self.get_file_type(file_path.name))

    def parse_text(self, content: str, file_type: str = "yaml") -> ParseResult:
        """
        Parse document text.

        Args:
            content: Document text
            file_type: 'json' or 'yaml'; YAML also accepts JSON syntax

        Returns:
            ParseResult with parsed data or error information
        """
        if file_type == "json":
            return self._parse_json(content, file_type)
        return self._parse_yaml(content, "yaml")

    def get_file_type(self, name: str) -> str:
        """Determine file type from the extension of a file name or URL path."""
        if Path(name).suffix.lower() == ".json":
            return "json"
        return "yaml"

    def _parse_json(self, content: str, file_type: str) -> ParseResult:
        """Parse JSON content."""
        try:
            data = json.loads(content)
            return ParseResult(success=True, data=data, file_type=file_type)
        except json.JSONDecodeError as e:
            return ParseResult(success=False, error=f"Invalid JSON format: {e}", file_type=file_type)

    def _parse_yaml(self, content: str, file_type: str) -> ParseResult:
        """Parse YAML content."""
        try:
            data = yaml.safe_load(content)
            return ParseResult(success=True, data=data, file_type=file_type)
        except yaml.YAMLError as e:
            return ParseResult(success=False, error=f"Invalid YAML format: {e}", file_type=file_type)
