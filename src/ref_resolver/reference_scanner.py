"""Reference Scanner for finding $ref objects in API documents."""

from typing import Any, Dict, Iterator, List


def is_ref(node: Any) -> bool:
    """True for a JSON Reference object: a mapping with a string ``$ref``."""
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


def is_local_ref(ref: str) -> bool:
    return ref.startswith("#")


class ReferenceScanner:
    """Scans document content for $ref references."""

    def find_references(self, content: Any) -> List[str]:
        """
        Find all $ref strings in content.

        Args:
            content: Document content to scan (dict, list, or other)

        Returns:
            Sorted list of unique $ref strings found
        """
        return sorted({node["$ref"] for node in self.iter_ref_nodes(content)})

    def find_external_references(self, content: Any) -> List[str]:
        """Find the unique $ref strings that point outside the document."""
        return [ref for ref in self.find_references(content) if not is_local_ref(ref)]

    def iter_ref_nodes(self, content: Any) -> Iterator[Dict[str, Any]]:
        """
        Yield every reference object in content, outermost first.

        Sibling values of a reference object are scanned too, since they may
        hold nested references of their own.
        """
        stack = [content]
        while stack:
            obj = stack.pop()
            if isinstance(obj, dict):
                if is_ref(obj):
                    yield obj
                stack.extend(reversed([v for k, v in obj.items() if k != "$ref"]))
            elif isinstance(obj, list):
                stack.extend(reversed(obj))
