"""Provenance markers added to inlined content, and their cleanup."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from .loader import Location

RESOLVED_FROM = "x-resolved-from"
RESOLVED_AT = "x-resolved-at"

# Internal: number of the pass that produced a node. Never part of the output.
RESOLVED_MARKER = "x-api-ref-resolver-pass"

BOOKKEEPING_KEYS = ("$ref", RESOLVED_FROM, RESOLVED_MARKER)


def sibling_keys(node: Dict[str, Any]) -> List[str]:
    """Keys of a reference object that are data rather than bookkeeping."""
    return [key for key in node if key not in BOOKKEEPING_KEYS]


def siblings_of(node: Dict[str, Any]) -> Dict[str, Any]:
    return {key: node[key] for key in sibling_keys(node)}


def tag_source(item: Any, location: Location, enabled: bool = True) -> Any:
    """Record where an inlined object came from."""
    if enabled and isinstance(item, dict):
        item[RESOLVED_FROM] = str(location)
    return item


def mark_resolved(item: Any, pass_number: int) -> Any:
    if isinstance(item, dict):
        item[RESOLVED_MARKER] = pass_number
    return item


def is_settled(node: Any, pass_number: int) -> bool:
    """True if the node was produced by an earlier pass and needs no revisit."""
    if not isinstance(node, dict):
        return False
    marker = node.get(RESOLVED_MARKER)
    return isinstance(marker, int) and marker < pass_number


def tag_root(document: Any, location: Location, enabled: bool = True) -> Any:
    """Stamp the root document with its source and the completion time."""
    if enabled and isinstance(document, dict):
        document[RESOLVED_FROM] = str(location)
        document[RESOLVED_AT] = datetime.now(timezone.utc).isoformat(timespec="seconds")
    return document


def strip_markers(node: Any) -> Any:
    """Recursively remove internal markers; returns the node for chaining."""
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            current.pop(RESOLVED_MARKER, None)
            stack.extend(current.values())
        elif isinstance(current, list):
            stack.extend(current)
    return node
