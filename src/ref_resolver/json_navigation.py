"""JSON Pointer helpers and navigation paths inside API documents.

A navigation path is the sequence of keys from the document root to the item
currently being visited, e.g. ``("paths", "/things", "post", "responses", 0)``.
It renders as the URL fragment ``#/paths/~1things/post/responses/0``.
"""

import re
from typing import Any, List, Optional, Sequence, Tuple, Union

from .errors import InvalidReferenceError

JsonKey = Union[str, int]

COMPONENT_POINTER = re.compile(r"^/components/\w+/[^/]+$")


def escape_key(key: JsonKey) -> str:
    return str(key).replace("~", "~0").replace("/", "~1")


def unescape_key(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def compile_pointer(keys: Sequence[JsonKey]) -> str:
    """Compile keys into a JSON Pointer, e.g. ``["a", "b/c"]`` -> ``/a/b~1c``."""
    return "".join("/" + escape_key(key) for key in keys)


def parse_pointer(pointer: str) -> List[str]:
    """
    Split a JSON Pointer into unescaped keys.

    Args:
        pointer: Pointer with or without a leading ``#``

    Returns:
        List of keys; empty for the whole document
    """
    if pointer.startswith("#"):
        pointer = pointer[1:]
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise InvalidReferenceError(f"Invalid JSON pointer (must start with '/'): {pointer}")
    return [unescape_key(segment) for segment in pointer[1:].split("/")]


def is_component_pointer(pointer: str) -> bool:
    """True if pointer addresses exactly ``/components/<section>/<name>``."""
    return bool(COMPONENT_POINTER.match(pointer))


def component_parts(pointer: str) -> Tuple[str, str]:
    """Return ``(section, name)`` of a component pointer."""
    _, section, name = parse_pointer(pointer)
    return section, name


def item_at_pointer(document: Any, pointer: str) -> Any:
    """
    Return the item addressed by a JSON Pointer.

    Mapping keys are matched as strings first; YAML may load keys such as
    response codes as integers, so digit segments fall back to ``int``.

    Raises:
        InvalidReferenceError: if any segment does not exist
    """
    current = document
    for segment in parse_pointer(pointer):
        if isinstance(current, dict):
            if segment in current:
                current = current[segment]
            elif segment.isdigit() and int(segment) in current:
                current = current[int(segment)]
            else:
                raise InvalidReferenceError(f"No item at '{pointer}' (missing key '{segment}')")
        elif isinstance(current, list):
            if not segment.isdigit() or int(segment) >= len(current):
                raise InvalidReferenceError(f"No item at '{pointer}' (bad index '{segment}')")
            current = current[int(segment)]
        else:
            raise InvalidReferenceError(f"No item at '{pointer}' (cannot descend into a scalar)")
    return current


class JsonNavigation:
    """Immutable path of keys from the document root to the current item."""

    def __init__(self, keys: Optional[Sequence[JsonKey]] = None):
        self._keys: Tuple[JsonKey, ...] = tuple(keys or ())

    @property
    def keys(self) -> Tuple[JsonKey, ...]:
        return self._keys

    def with_key(self, key: JsonKey) -> "JsonNavigation":
        """Return a new navigation one level deeper."""
        return JsonNavigation(self._keys + (key,))

    def as_pointer(self) -> str:
        return compile_pointer(self._keys)

    def as_fragment(self) -> str:
        """Render as a local URL fragment, e.g. ``#/components/schemas/thing``."""
        return "#" + self.as_pointer()

    def is_at_component(self) -> bool:
        """True if the path is ``components/<section>/<name>``."""
        return len(self._keys) == 3 and self._keys[0] == "components"

    def component_slot(self) -> Optional[Tuple[str, str]]:
        if not self.is_at_component():
            return None
        return str(self._keys[1]), str(self._keys[2])

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonNavigation) and self._keys == other._keys

    def __hash__(self) -> int:
        return hash(self._keys)

    def __repr__(self) -> str:
        return f"JsonNavigation({self.as_fragment()!r})"
