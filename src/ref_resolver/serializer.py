"""Serialization of resolved documents to YAML or JSON text."""

import json
from pathlib import Path
from typing import Any, Union

import yaml

OUTPUT_FORMATS = ("yaml", "json")


class NoAliasDumper(yaml.SafeDumper):
    """Safe dumper that never emits &anchors / *aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def dump_document(document: Any, output_format: str = "yaml") -> str:
    """
    Convert a document to text.

    Args:
        document: Resolved document
        output_format: 'yaml' or 'json'

    Returns:
        Document text ending with a newline
    """
    if output_format == "json":
        # default=str covers values YAML types natively, such as dates
        return json.dumps(document, indent=2, ensure_ascii=False, default=str) + "\n"
    if output_format == "yaml":
        return yaml.dump(
            document,
            Dumper=NoAliasDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=120,
        )
    raise ValueError(f"Unsupported output format: {output_format}")


def format_for_path(path: Union[str, Path], default: str = "yaml") -> str:
    """Pick the output format from a file extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return default


def write_document(document: Any, path: Union[str, Path], output_format: str = "yaml") -> Path:
    """Write a document to a file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_document(document, output_format), encoding="utf-8")
    return path
