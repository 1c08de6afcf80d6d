"""Rewriting of references inside documents that are moved into the root.

Once content from another document becomes part of the root document, its
references must keep addressing what they addressed in their own file:

- fragment rewrite: local ``#/...`` references of a document spliced as a
  whole at some navigation path are prefixed with that path. Component
  pointers instead become fully qualified, so the component is lifted into the
  root ``components`` section by name.
- path rewrite: relative references are resolved against the document's own
  locator.

Both mutate the cached document in place, and each runs at most once per
locator no matter how many reference sites pull from that document.
"""

import logging
from typing import Any, Set
from urllib.parse import unquote

from .json_navigation import is_component_pointer
from .loader import Location
from .reference_scanner import ReferenceScanner, is_local_ref

logger = logging.getLogger(__name__)


class ReferenceRewriter:
    """Keeps references valid as documents are relocated into the root."""

    def __init__(self, scanner: ReferenceScanner = None):
        self.scanner = scanner or ReferenceScanner()
        self._fragment_rewritten: Set[str] = set()
        self._path_rewritten: Set[str] = set()

    def was_fragment_rewritten(self, locator: str) -> bool:
        return locator in self._fragment_rewritten

    def was_path_rewritten(self, locator: str) -> bool:
        return locator in self._path_rewritten

    def rewrite_fragments(self, document: Any, locator: str, splice_fragment: str) -> bool:
        """
        Re-anchor the local references of a document spliced into the root.

        Must run before ``rewrite_paths`` for the same document.

        Args:
            document: Cached document, mutated in place
            locator: Locator the document was loaded from
            splice_fragment: Local fragment (``#/...``) where the document's
                content lands in the root

        Returns:
            False if the document had already been rewritten
        """
        if locator in self._fragment_rewritten:
            return False
        self._fragment_rewritten.add(locator)

        count = 0
        for node in self.scanner.iter_ref_nodes(document):
            ref = node["$ref"]
            if not is_local_ref(ref):
                continue
            pointer = unquote(ref[1:])
            if is_component_pointer(pointer):
                node["$ref"] = str(Location(locator, pointer))
            else:
                node["$ref"] = splice_fragment + pointer
            count += 1
        logger.debug(f"Re-anchored {count} local references of {locator} at {splice_fragment}")
        return True

    def rewrite_paths(self, document: Any, locator: str) -> bool:
        """
        Make every relative, non-local reference of a document absolute.

        Args:
            document: Cached document, mutated in place
            locator: Locator the document was loaded from

        Returns:
            False if the document had already been rewritten
        """
        if locator in self._path_rewritten:
            return False
        self._path_rewritten.add(locator)

        count = 0
        for node in self.scanner.iter_ref_nodes(document):
            ref = node["$ref"]
            if is_local_ref(ref):
                continue
            absolute = str(Location.parse(ref, locator))
            if absolute != ref:
                node["$ref"] = absolute
                count += 1
        logger.debug(f"Qualified {count} relative references of {locator}")
        return True

    def qualify_local_refs(self, item: Any, locator: str) -> Any:
        """
        Point the local references of an extracted copy back at its source.

        Used for items taken out of a document that was never spliced as a
        whole, so a ``#/...`` reference inside still means "in that file".
        Only the copy is changed, never the cached document.
        """
        if self.was_fragment_rewritten(locator):
            return item
        for node in self.scanner.iter_ref_nodes(item):
            ref = node["$ref"]
            if is_local_ref(ref):
                node["$ref"] = str(Location(locator, unquote(ref[1:])))
        return item
